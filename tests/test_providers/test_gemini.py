"""Tests for the Google Gemini provider."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from gemctl.providers.base import GenerationRequest, ProviderError
from gemctl.providers.gemini.config import GeminiConfig


class _FakeAPIError(Exception):
    """Stub for google.genai.errors.APIError."""

    def __init__(self, message: str, *, code: int) -> None:
        super().__init__(message)
        self.code = code


def _mock_genai_module() -> MagicMock:
    """Return a MagicMock that behaves like the google.genai module."""
    mod = MagicMock()

    types = MagicMock()
    types.GenerateContentConfig = MagicMock(side_effect=lambda **kw: SimpleNamespace(**kw))
    types.HttpOptions = MagicMock(side_effect=lambda **kw: SimpleNamespace(**kw))
    mod.types = types

    client_instance = MagicMock()
    mod.Client.return_value = client_instance
    return mod


def _genai_modules(mock_genai: MagicMock) -> dict[str, Any]:
    """Build sys.modules patch dict for Gemini tests."""
    return {
        "google": MagicMock(genai=mock_genai),
        "google.genai": mock_genai,
    }


def _config(**overrides: Any) -> GeminiConfig:
    defaults: dict[str, Any] = {"api_key": "test-api-key"}
    defaults.update(overrides)
    return GeminiConfig(**defaults)


def _mock_response(
    text: str | None = "Hello!",
    finish_reason: str = "STOP",
    prompt_tokens: int = 10,
    completion_tokens: int = 25,
) -> SimpleNamespace:
    """Build a fake Gemini response."""
    return SimpleNamespace(
        text=text,
        candidates=[SimpleNamespace(finish_reason=SimpleNamespace(name=finish_reason))],
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt_tokens,
            candidates_token_count=completion_tokens,
        ),
    )


class TestGeminiConfig:
    def test_defaults(self) -> None:
        cfg = _config()
        assert cfg.model == "gemini-pro"
        assert cfg.max_tokens == 4000
        assert cfg.temperature == 0.7
        assert cfg.top_p == 0.9
        assert cfg.timeout is None


class TestGeminiProvider:
    def test_generate_success(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config(model="gemini-1.5-flash"))
            provider._client.models.generate_content.return_value = _mock_response("Hi there!")
            result = provider.generate(GenerationRequest(prompt="Hi"))

            assert result.text == "Hi there!"
            assert result.model == "gemini-1.5-flash"
            assert result.finish_reason == "STOP"
            assert result.usage == {"prompt_tokens": 10, "completion_tokens": 25}
            mock_genai.Client.assert_called_once_with(api_key="test-api-key")

    def test_request_parameters(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config())
            provider._client.models.generate_content.return_value = _mock_response()
            provider.generate(
                GenerationRequest(prompt="Explain", temperature=0.0, max_tokens=64, top_p=0.5)
            )

            kwargs = provider._client.models.generate_content.call_args.kwargs
            assert kwargs["model"] == "gemini-pro"
            assert kwargs["contents"] == "Explain"
            assert kwargs["config"].temperature == 0.0
            assert kwargs["config"].max_output_tokens == 64
            assert kwargs["config"].top_p == 0.5

    def test_config_defaults_fill_request(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config(temperature=0.3, max_tokens=100, top_p=0.8))
            provider._client.models.generate_content.return_value = _mock_response()
            provider.generate(GenerationRequest(prompt="x"))

            gen_config = provider._client.models.generate_content.call_args.kwargs["config"]
            assert gen_config.temperature == 0.3
            assert gen_config.max_output_tokens == 100
            assert gen_config.top_p == 0.8

    def test_timeout_in_milliseconds(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            GeminiProvider(_config(timeout=2.5))
            http_options = mock_genai.Client.call_args.kwargs["http_options"]
            assert http_options.timeout == 2500

    def test_api_error(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config())
            provider._client.models.generate_content.side_effect = _FakeAPIError(
                "quota exceeded", code=429
            )
            with pytest.raises(ProviderError) as exc_info:
                provider.generate(GenerationRequest(prompt="x"))

            assert exc_info.value.provider == "gemini"
            assert exc_info.value.status_code == 429
            assert exc_info.value.retryable is True

    def test_client_error_not_retryable(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config())
            provider._client.models.generate_content.side_effect = _FakeAPIError(
                "API key not valid", code=400
            )
            with pytest.raises(ProviderError) as exc_info:
                provider.generate(GenerationRequest(prompt="x"))
            assert exc_info.value.retryable is False
            assert exc_info.value.status_code == 400

    def test_transport_error(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config())
            provider._client.models.generate_content.side_effect = ConnectionError("reset")
            with pytest.raises(ProviderError, match="reset") as exc_info:
                provider.generate(GenerationRequest(prompt="x"))
            assert exc_info.value.status_code is None

    def test_blocked_response(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config())
            provider._client.models.generate_content.return_value = _mock_response(
                text=None, finish_reason="SAFETY"
            )
            with pytest.raises(ProviderError, match="SAFETY"):
                provider.generate(GenerationRequest(prompt="x"))

    def test_properties(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from gemctl.providers.gemini.ai import GeminiProvider

            provider = GeminiProvider(_config(model="gemini-2.0-flash"))
            assert provider.name == "gemini"
            assert provider.model_name == "gemini-2.0-flash"
            provider.close()
            assert provider._client is None
