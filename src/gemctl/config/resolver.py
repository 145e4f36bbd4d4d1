"""Merge config file, environment and command-line flags into one settings object."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from gemctl.config.loader import default_log_file
from gemctl.config.models import ConfigFile, ProviderName
from gemctl.errors import MissingCredential

CREDENTIAL_ENV_VARS: dict[str, str] = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
}


class ResolvedConfig(BaseModel):
    """Effective settings for a single invocation.

    Every field has a value once resolution is done, except the credentials,
    which stay ``None`` when neither the file nor the environment provides one.
    """

    model_config = ConfigDict(frozen=True)

    gemini_api_key: SecretStr | None = None
    openai_api_key: SecretStr | None = None
    openai_base_url: str | None = None
    provider: ProviderName
    primary_model: str
    fallback_model: str
    max_tokens: int = Field(gt=0)
    temperature: float = Field(ge=0.0, le=2.0)
    top_p: float = Field(ge=0.0, le=1.0)
    max_retries: int = Field(ge=0)
    timeout: float | None = None
    log_level: str
    log_file: str

    @property
    def model(self) -> str:
        """Model name used for the selected provider."""
        return self.primary_model if self.provider == "gemini" else self.fallback_model

    @property
    def api_key(self) -> SecretStr | None:
        """Credential of the selected provider."""
        return self.gemini_api_key if self.provider == "gemini" else self.openai_api_key


def _env_secret(env: Mapping[str, str], provider: str) -> SecretStr | None:
    value = env.get(CREDENTIAL_ENV_VARS[provider], "").strip()
    return SecretStr(value) if value else None


def resolve_config(
    file_config: ConfigFile | None = None,
    env: Mapping[str, str] | None = None,
    *,
    model: str | None = None,
    temperature: float | None = None,
    provider: ProviderName | None = None,
) -> ResolvedConfig:
    """Resolve effective settings.

    Precedence, highest first: command-line flag, configuration file,
    environment variable (credentials only), built-in default.

    Args:
        file_config: Parsed configuration file; ``None`` means an empty one.
        env: Environment mapping; defaults to ``os.environ``.
        model: ``--model`` override for the selected provider's model.
        temperature: ``--temperature`` override. ``0.0`` is a valid override.
        provider: ``--provider`` override.
    """
    cfg = file_config if file_config is not None else ConfigFile()
    env = os.environ if env is None else env

    selected: ProviderName = provider or cfg.api.provider
    primary_model = cfg.api.model_preferences.primary
    fallback_model = cfg.api.model_preferences.fallback
    if model:
        if selected == "gemini":
            primary_model = model
        else:
            fallback_model = model

    return ResolvedConfig(
        gemini_api_key=cfg.api.gemini_api_key or _env_secret(env, "gemini"),
        openai_api_key=cfg.api.openai_api_key or _env_secret(env, "openai"),
        openai_base_url=cfg.api.openai_base_url,
        provider=selected,
        primary_model=primary_model,
        fallback_model=fallback_model,
        max_tokens=cfg.settings.max_tokens,
        temperature=cfg.settings.temperature if temperature is None else temperature,
        top_p=cfg.settings.top_p,
        max_retries=cfg.settings.max_retries,
        timeout=cfg.settings.timeout,
        log_level=cfg.logging.level,
        log_file=cfg.logging.file or str(default_log_file()),
    )


def require_credential(resolved: ResolvedConfig) -> SecretStr:
    """Return the selected provider's API key.

    Raises:
        MissingCredential: Neither the config file nor the environment has one.
    """
    key = resolved.api_key
    if key is None or not key.get_secret_value():
        raise MissingCredential(resolved.provider, CREDENTIAL_ENV_VARS[resolved.provider])
    return key
