"""Generation providers and the factory that picks one from resolved settings."""

from __future__ import annotations

from gemctl.config.resolver import ResolvedConfig, require_credential
from gemctl.providers.base import (
    GenerationProvider,
    GenerationRequest,
    GenerationResult,
    ProviderError,
)
from gemctl.providers.mock import MockProvider

__all__ = [
    "GenerationProvider",
    "GenerationRequest",
    "GenerationResult",
    "MockProvider",
    "ProviderError",
    "create_provider",
]


def create_provider(resolved: ResolvedConfig) -> GenerationProvider:
    """Build the provider selected by ``resolved.provider``.

    Raises:
        MissingCredential: The selected provider has no API key.
    """
    api_key = require_credential(resolved)
    if resolved.provider == "gemini":
        from gemctl.providers.gemini import GeminiConfig, GeminiProvider

        return GeminiProvider(
            GeminiConfig(
                api_key=api_key,
                model=resolved.model,
                max_tokens=resolved.max_tokens,
                temperature=resolved.temperature,
                top_p=resolved.top_p,
                timeout=resolved.timeout,
            )
        )
    if resolved.provider == "openai":
        from gemctl.providers.openai import OpenAIConfig, OpenAIProvider

        return OpenAIProvider(
            OpenAIConfig(
                api_key=api_key,
                base_url=resolved.openai_base_url,
                model=resolved.model,
                max_tokens=resolved.max_tokens,
                temperature=resolved.temperature,
                top_p=resolved.top_p,
                timeout=resolved.timeout,
            )
        )
    raise ValueError(f"Unknown provider: {resolved.provider}")
