"""Google Gemini provider configuration."""

from __future__ import annotations

from pydantic import BaseModel, SecretStr


class GeminiConfig(BaseModel):
    """Google Gemini provider configuration."""

    api_key: SecretStr
    model: str = "gemini-pro"
    max_tokens: int = 4000
    temperature: float = 0.7
    top_p: float = 0.9
    timeout: float | None = None
    """HTTP request timeout in seconds. ``None`` keeps the SDK default."""
