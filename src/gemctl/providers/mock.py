"""Mock provider for testing."""

from __future__ import annotations

from gemctl.providers.base import (
    GenerationProvider,
    GenerationRequest,
    GenerationResult,
    ProviderError,
)


class MockProvider(GenerationProvider):
    """Round-robin response provider for tests.

    Each entry of *errors* is raised by one call, in order, before responses
    are served.
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        *,
        errors: list[ProviderError] | None = None,
        model: str = "mock",
    ) -> None:
        self.responses = responses or ["Hello from AI"]
        self.errors = list(errors or [])
        self.calls: list[GenerationRequest] = []
        self.closed = False
        self._model = model
        self._index = 0

    @property
    def name(self) -> str:
        return "mock"

    @property
    def model_name(self) -> str:
        return self._model

    def generate(self, request: GenerationRequest) -> GenerationResult:
        self.calls.append(request)
        if self.errors:
            raise self.errors.pop(0)
        text = self.responses[self._index % len(self.responses)]
        self._index += 1
        return GenerationResult(
            text=text,
            model=self._model,
            finish_reason="stop",
            usage={"prompt_tokens": 10, "completion_tokens": 5},
        )

    def close(self) -> None:
        self.closed = True
