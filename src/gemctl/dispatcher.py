"""Send one prompt to the configured provider and return its text."""

from __future__ import annotations

import logging

from gemctl.config.resolver import ResolvedConfig
from gemctl.errors import GenerationFailure
from gemctl.providers.base import (
    GenerationProvider,
    GenerationRequest,
    GenerationResult,
    ProviderError,
)
from gemctl.retry import RetryPolicy, retry_with_backoff


class PromptDispatcher:
    """Runs a single generation request against a provider.

    The logger is passed in rather than looked up, so the caller decides where
    records go. Without a retry budget in *settings* exactly one call is made.
    """

    def __init__(
        self,
        provider: GenerationProvider,
        settings: ResolvedConfig,
        logger: logging.Logger,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings
        self._logger = logger
        self._retry_policy = retry_policy or RetryPolicy(max_retries=settings.max_retries)

    @property
    def provider(self) -> GenerationProvider:
        return self._provider

    def build_request(self, prompt: str) -> GenerationRequest:
        return GenerationRequest(
            prompt=prompt,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_tokens,
            top_p=self._settings.top_p,
        )

    def dispatch(self, prompt: str) -> str:
        """Return the provider's response text for *prompt*.

        Raises:
            GenerationFailure: The prompt is empty or the provider call failed.
        """
        return self.dispatch_result(prompt).text

    def dispatch_result(self, prompt: str) -> GenerationResult:
        """Like :meth:`dispatch` but returns the full :class:`GenerationResult`."""
        if not prompt.strip():
            raise GenerationFailure("Prompt is empty", provider=self._provider.name)

        request = self.build_request(prompt)
        self._logger.info(
            "Generating with %s model %s (temperature=%s)",
            self._provider.name,
            self._provider.model_name,
            request.temperature,
        )
        try:
            result = retry_with_backoff(
                self._provider.generate,
                self._retry_policy,
                request,
                should_retry=lambda exc: isinstance(exc, ProviderError) and exc.retryable,
            )
        except ProviderError as exc:
            self._logger.error("Error generating response: %s", exc)
            raise GenerationFailure(
                str(exc), provider=exc.provider, status_code=exc.status_code
            ) from exc
        except Exception as exc:
            self._logger.error("Error generating response: %s", exc)
            raise GenerationFailure(str(exc), provider=self._provider.name) from exc

        self._logger.info(
            "Received %d characters from %s (usage=%s)",
            len(result.text),
            result.model,
            result.usage,
        )
        return result
