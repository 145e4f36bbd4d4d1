"""OpenAI provider — generates text via the OpenAI Chat Completions API."""

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
from gemctl.providers.openai.config import OpenAIConfig

logger = logging.getLogger("gemctl.providers.openai")


class OpenAIProvider(GenerationProvider):
    """Provider using the OpenAI Chat Completions API."""

    def __init__(self, config: OpenAIConfig) -> None:
        try:
            import openai as _openai
        except ImportError as exc:
            raise ImportError(
                "openai is required for OpenAIProvider. Install it with: pip install openai"
            ) from exc
        self._config = config
        self._api_status_error = _openai.APIStatusError
        client_kwargs: dict[str, Any] = {
            "api_key": config.api_key.get_secret_value(),
            "base_url": config.base_url,
        }
        if config.timeout is not None:
            client_kwargs["timeout"] = config.timeout
        self._client = _openai.OpenAI(**client_kwargs)

    @property
    def name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._config.model

    def generate(self, request: GenerationRequest) -> GenerationResult:
        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "max_tokens": request.max_tokens or self._config.max_tokens,
            "messages": [{"role": "user", "content": request.prompt}],
            "temperature": (
                request.temperature
                if request.temperature is not None
                else self._config.temperature
            ),
            "top_p": request.top_p if request.top_p is not None else self._config.top_p,
        }

        try:
            response = self._client.chat.completions.create(**kwargs)
        except self._api_status_error as exc:
            raise ProviderError(
                str(exc),
                retryable=exc.status_code in RETRYABLE_STATUS_CODES,
                provider="openai",
                status_code=exc.status_code,
            ) from exc
        except Exception as exc:
            raise ProviderError(str(exc), provider="openai") from exc

        if not response.choices:
            raise ProviderError("OpenAI returned no choices", provider="openai")

        choice = response.choices[0]
        usage: dict[str, int] = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
            }
        logger.debug("OpenAI usage for %s: %s", self._config.model, usage)

        return GenerationResult(
            text=choice.message.content or "",
            model=getattr(response, "model", None) or self._config.model,
            finish_reason=choice.finish_reason,
            usage=usage,
        )

    def close(self) -> None:
        self._client.close()
