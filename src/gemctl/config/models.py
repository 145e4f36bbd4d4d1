"""Schema of the YAML configuration file."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

ProviderName = Literal["gemini", "openai"]

DEFAULT_PROVIDER: ProviderName = "gemini"
DEFAULT_PRIMARY_MODEL = "gemini-pro"
DEFAULT_FALLBACK_MODEL = "gpt-3.5-turbo"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9
DEFAULT_MAX_RETRIES = 0
DEFAULT_LOG_LEVEL = "INFO"


class ModelPreferences(BaseModel):
    """Model names under ``api.model_preferences``."""

    model_config = ConfigDict(extra="allow")

    primary: str = DEFAULT_PRIMARY_MODEL
    fallback: str = DEFAULT_FALLBACK_MODEL


class ApiSection(BaseModel):
    """The ``api`` section.

    Attributes:
        gemini_api_key: Google Gemini key. An empty string counts as unset.
        openai_api_key: OpenAI key. An empty string counts as unset.
        openai_base_url: OpenAI-compatible endpoint; ``None`` uses api.openai.com.
        provider: Provider used by ``generate`` when no flag is given.
        model_preferences: Primary (Gemini) and fallback (OpenAI) model names.
    """

    model_config = ConfigDict(extra="allow", protected_namespaces=())

    gemini_api_key: SecretStr | None = None
    openai_api_key: SecretStr | None = None
    openai_base_url: str | None = None
    provider: ProviderName = DEFAULT_PROVIDER
    model_preferences: ModelPreferences = Field(default_factory=ModelPreferences)

    @field_validator("gemini_api_key", "openai_api_key", "openai_base_url", mode="before")
    @classmethod
    def _blank_key_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("model_preferences", mode="before")
    @classmethod
    def _null_section(cls, value: Any) -> Any:
        return {} if value is None else value


class GenerationSettings(BaseModel):
    """The ``settings`` section."""

    model_config = ConfigDict(extra="allow")

    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    top_p: float = Field(default=DEFAULT_TOP_P, ge=0.0, le=1.0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    timeout: float | None = Field(default=None, gt=0.0)
    """Request timeout in seconds. ``None`` keeps the SDK default."""


class LoggingSection(BaseModel):
    """The ``logging`` section. ``file`` defaults to the config directory."""

    model_config = ConfigDict(extra="allow")

    level: str = DEFAULT_LOG_LEVEL
    file: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return level


class ProjectEntry(BaseModel):
    """An entry under ``projects``. Kept as data, not used for generation."""

    model_config = ConfigDict(extra="allow")

    path: str | None = None
    context: str | None = None


class ConfigFile(BaseModel):
    """Parsed configuration file. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    api: ApiSection = Field(default_factory=ApiSection)
    settings: GenerationSettings = Field(default_factory=GenerationSettings)
    logging: LoggingSection = Field(default_factory=LoggingSection)
    projects: dict[str, ProjectEntry] = Field(default_factory=dict)

    @field_validator("api", "settings", "logging", "projects", mode="before")
    @classmethod
    def _null_section(cls, value: Any) -> Any:
        # A YAML key with nothing under it parses as None.
        return {} if value is None else value
