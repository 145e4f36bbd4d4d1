"""OpenAI provider configuration."""

from __future__ import annotations

from pydantic import BaseModel, SecretStr


class OpenAIConfig(BaseModel):
    """OpenAI provider configuration.

    Attributes:
        api_key: API key for authentication.
        base_url: Custom base URL for OpenAI-compatible APIs. If None, uses the
            default OpenAI API.
        model: Model identifier to use.
        max_tokens: Maximum tokens in the response.
        temperature: Sampling temperature.
        top_p: Nucleus sampling probability mass.
    """

    api_key: SecretStr
    base_url: str | None = None
    model: str = "gpt-3.5-turbo"
    max_tokens: int = 4000
    temperature: float = 0.7
    top_p: float = 0.9
    timeout: float | None = None
    """HTTP request timeout in seconds. ``None`` keeps the SDK default."""
