"""Abstract base class for generation providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class GenerationRequest(BaseModel):
    """A single prompt plus sampling parameters."""

    prompt: str
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None


class GenerationResult(BaseModel):
    """Text returned by a provider."""

    text: str
    model: str
    finish_reason: str | None = None
    usage: dict[str, int] = Field(default_factory=dict)


class ProviderError(Exception):
    """Error from a provider SDK call.

    Attributes:
        retryable: Whether the caller may retry the request.
        provider: Name of the provider that raised the error.
        status_code: HTTP status code from the provider, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        provider: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retryable = retryable
        self.provider = provider
        self.status_code = status_code


RETRYABLE_STATUS_CODES = (429, 500, 502, 503)


class GenerationProvider(ABC):
    """Generative-AI service that turns a prompt into text."""

    @property
    def name(self) -> str:
        """Provider name (e.g. 'gemini', 'openai')."""
        return self.__class__.__name__

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier (e.g. 'gemini-pro', 'gpt-3.5-turbo')."""
        ...

    @abstractmethod
    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate text for *request*.

        Raises:
            ProviderError: The SDK call failed.
        """
        ...

    def close(self) -> None:  # noqa: B027
        """Release resources. Override in subclasses that hold connections."""
