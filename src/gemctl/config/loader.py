"""Locate and read the YAML configuration file."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from gemctl.config.models import ConfigFile
from gemctl.errors import ConfigParseFailure

logger = logging.getLogger("gemctl.config")

CONFIG_ENV_VAR = "GEMCTL_CONFIG"
CONFIG_FILENAME = "config.yaml"
LOG_FILENAME = "gemctl.log"


def default_config_dir() -> Path:
    """Per-user configuration directory (``~/.config/gemctl``)."""
    return Path.home() / ".config" / "gemctl"


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Config file path, honouring ``GEMCTL_CONFIG`` when set."""
    env = os.environ if env is None else env
    override = env.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return default_config_dir() / CONFIG_FILENAME


def default_log_file() -> Path:
    return default_config_dir() / LOG_FILENAME


def read_config_mapping(path: Path) -> dict[str, Any]:
    """Return the raw YAML mapping stored at *path*.

    A missing or empty file yields an empty mapping.

    Raises:
        ConfigParseFailure: The file is not valid YAML, is not a mapping, or
            cannot be read.
    """
    if not path.exists():
        logger.debug("No configuration file at %s", path)
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ConfigParseFailure(
            f"Invalid YAML in {path}: {exc}".replace("\n", " "), path=str(path)
        ) from exc
    except OSError as exc:
        raise ConfigParseFailure(f"Cannot read {path}: {exc}", path=str(path)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseFailure(
            f"Configuration in {path} must be a mapping, got {type(data).__name__}",
            path=str(path),
        )
    return data


def parse_config(data: Mapping[str, Any], *, path: Path | None = None) -> ConfigFile:
    """Validate a raw mapping against the configuration schema."""
    try:
        return ConfigFile.model_validate(dict(data))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        where = f" in {path}" if path is not None else ""
        raise ConfigParseFailure(
            f"Invalid configuration{where}: {problems}",
            path=str(path) if path is not None else None,
        ) from exc


def load_config_file(path: Path | str | None = None) -> ConfigFile:
    """Load and validate the configuration file.

    A file that does not exist is treated as an empty configuration.
    """
    path = default_config_path() if path is None else Path(path).expanduser()
    return parse_config(read_config_mapping(path), path=path)
