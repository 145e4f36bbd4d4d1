"""Write-back of configuration values and the default config template."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from gemctl.config.loader import default_log_file, parse_config, read_config_mapping
from gemctl.config.models import (
    DEFAULT_FALLBACK_MODEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PRIMARY_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
)
from gemctl.errors import ConfigParseFailure, ConfigValueError, IOFailure

logger = logging.getLogger("gemctl.config")

# Flat setting names accepted by config-set, mapped to their place in the file.
KEY_ALIASES: dict[str, str] = {
    "gemini_api_key": "api.gemini_api_key",
    "openai_api_key": "api.openai_api_key",
    "openai_base_url": "api.openai_base_url",
    "provider": "api.provider",
    "primary_model": "api.model_preferences.primary",
    "fallback_model": "api.model_preferences.fallback",
    "max_tokens": "settings.max_tokens",
    "temperature": "settings.temperature",
    "top_p": "settings.top_p",
    "max_retries": "settings.max_retries",
    "timeout": "settings.timeout",
    "log_level": "logging.level",
    "log_file": "logging.file",
}

# Keys whose values are always stored verbatim as strings.
_STRING_KEYS = frozenset(
    {
        "gemini_api_key",
        "openai_api_key",
        "openai_base_url",
        "provider",
        "primary",
        "fallback",
        "level",
        "file",
    }
)


def default_config_document() -> dict[str, Any]:
    """The configuration written by ``config-init``."""
    return {
        "api": {
            "gemini_api_key": "",
            "openai_api_key": "",
            "provider": DEFAULT_PROVIDER,
            "model_preferences": {
                "primary": DEFAULT_PRIMARY_MODEL,
                "fallback": DEFAULT_FALLBACK_MODEL,
            },
        },
        "settings": {
            "max_tokens": DEFAULT_MAX_TOKENS,
            "temperature": DEFAULT_TEMPERATURE,
            "top_p": DEFAULT_TOP_P,
            "max_retries": DEFAULT_MAX_RETRIES,
        },
        "logging": {
            "level": DEFAULT_LOG_LEVEL,
            "file": str(default_log_file()),
        },
        "projects": {},
    }


def expand_key(key: str) -> list[str]:
    """Turn ``settings.temperature`` (or an alias) into its path segments."""
    key = key.strip()
    dotted = KEY_ALIASES.get(key, key)
    parts = dotted.split(".")
    if not key or any(not p for p in parts):
        raise ConfigValueError(f"Invalid configuration key {key!r}")
    return parts


def parse_value(raw: str) -> Any:
    """Interpret a command-line value as a YAML scalar (``0.5``, ``true``, ``null``)."""
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if isinstance(value, (dict, list)):
        # Only scalars are set through key paths.
        return raw
    if value is None and raw.strip() not in ("null", "~"):
        return raw
    return value


def apply_value(document: dict[str, Any], parts: list[str], value: Any) -> dict[str, Any]:
    """Return a copy of *document* with *value* stored at the key path."""
    updated = copy.deepcopy(document)
    node: dict[str, Any] = updated
    for i, part in enumerate(parts[:-1]):
        child = node.get(part)
        if child is None:
            child = {}
            node[part] = child
        elif not isinstance(child, dict):
            prefix = ".".join(parts[: i + 1])
            raise ConfigValueError(f"Cannot set {'.'.join(parts)}: {prefix} is not a mapping")
        node = child
    node[parts[-1]] = value
    return updated


def write_config_mapping(path: Path, document: dict[str, Any]) -> None:
    """Overwrite *path* with *document* as YAML, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump(document, fh, sort_keys=False, default_flow_style=False)
    except OSError as exc:
        raise IOFailure(f"Cannot write {path}: {exc}", path=str(path)) from exc


def set_config_value(path: Path, key: str, raw_value: str) -> Any:
    """Persist ``key = raw_value`` in the configuration file at *path*.

    Returns the parsed value that was stored.

    Raises:
        ConfigParseFailure: The existing file cannot be parsed.
        ConfigValueError: The key is malformed or the result fails validation.
        IOFailure: The file cannot be written.
    """
    parts = expand_key(key)
    value = raw_value if parts[-1] in _STRING_KEYS else parse_value(raw_value)
    document = read_config_mapping(path)
    updated = apply_value(document, parts, value)
    try:
        parse_config(updated)
    except ConfigParseFailure as exc:
        raise ConfigValueError(f"Rejected {'.'.join(parts)}={raw_value!r}: {exc}") from exc
    write_config_mapping(path, updated)
    logger.debug("Set %s in %s", ".".join(parts), path)
    return value


def write_default_config(path: Path, *, force: bool = False) -> Path:
    """Write the default template to *path*.

    Raises:
        ConfigValueError: *path* exists and *force* is not set.
        IOFailure: The file cannot be written.
    """
    if path.exists() and not force:
        raise ConfigValueError(f"{path} already exists (use --force to overwrite)")
    write_config_mapping(path, default_config_document())
    return path
