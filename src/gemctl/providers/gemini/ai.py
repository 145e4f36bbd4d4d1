"""Google Gemini provider — generates text via the Google Gen AI SDK."""

from __future__ import annotations

import logging
from typing import Any

from gemctl.providers.base import (
    RETRYABLE_STATUS_CODES,
    GenerationProvider,
    GenerationRequest,
    GenerationResult,
    ProviderError,
)
from gemctl.providers.gemini.config import GeminiConfig

logger = logging.getLogger("gemctl.providers.gemini")


class GeminiProvider(GenerationProvider):
    """Provider using ``google.genai.Client.models.generate_content``."""

    def __init__(self, config: GeminiConfig) -> None:
        try:
            from google import genai as _genai
            from google.genai import types as _types
        except ImportError as exc:
            raise ImportError(
                "google-genai is required for GeminiProvider. "
                "Install it with: pip install google-genai"
            ) from exc

        self._config = config
        self._types = _types
        client_kwargs: dict[str, Any] = {"api_key": config.api_key.get_secret_value()}
        if config.timeout is not None:
            # HttpOptions takes milliseconds.
            client_kwargs["http_options"] = _types.HttpOptions(timeout=int(config.timeout * 1000))
        self._client = _genai.Client(**client_kwargs)

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def model_name(self) -> str:
        return self._config.model

    def _build_gen_config(self, request: GenerationRequest) -> Any:
        return self._types.GenerateContentConfig(
            temperature=(
                request.temperature
                if request.temperature is not None
                else self._config.temperature
            ),
            max_output_tokens=request.max_tokens or self._config.max_tokens,
            top_p=request.top_p if request.top_p is not None else self._config.top_p,
        )

    def _wrap_error(self, exc: Exception) -> ProviderError:
        """Wrap an SDK exception into a ProviderError."""
        status_code = getattr(exc, "code", None) or getattr(exc, "status_code", None)
        if not isinstance(status_code, int):
            status_code = None
        retryable = (
            status_code in RETRYABLE_STATUS_CODES
            if status_code
            else any(
                term in str(exc).lower() for term in ["rate", "limit", "429", "500", "502", "503"]
            )
        )
        return ProviderError(
            str(exc),
            retryable=retryable,
            provider="gemini",
            status_code=status_code,
        )

    def generate(self, request: GenerationRequest) -> GenerationResult:
        try:
            response = self._client.models.generate_content(
                model=self._config.model,
                contents=request.prompt,
                config=self._build_gen_config(request),
            )
        except Exception as exc:
            raise self._wrap_error(exc) from exc

        finish_reason: str | None = None
        if response.candidates:
            reason = getattr(response.candidates[0], "finish_reason", None)
            if reason is not None:
                finish_reason = str(getattr(reason, "name", reason))

        text = response.text
        if text is None:
            # No text parts, e.g. the prompt was blocked.
            raise ProviderError(
                f"Gemini returned no text (finish_reason={finish_reason})",
                provider="gemini",
            )

        usage: dict[str, int] = {}
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
            }
        logger.debug("Gemini usage for %s: %s", self._config.model, usage)

        return GenerationResult(
            text=text,
            model=self._config.model,
            finish_reason=finish_reason,
            usage=usage,
        )

    def close(self) -> None:
        """Release the genai client reference."""
        self._client = None  # type: ignore[assignment]
