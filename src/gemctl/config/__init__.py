"""Configuration file schema, loading, resolution and write-back."""

from gemctl.config.loader import (
    CONFIG_ENV_VAR,
    default_config_dir,
    default_config_path,
    default_log_file,
    load_config_file,
)
from gemctl.config.models import ConfigFile
from gemctl.config.resolver import (
    CREDENTIAL_ENV_VARS,
    ResolvedConfig,
    require_credential,
    resolve_config,
)
from gemctl.config.store import set_config_value, write_default_config

__all__ = [
    "CONFIG_ENV_VAR",
    "CREDENTIAL_ENV_VARS",
    "ConfigFile",
    "ResolvedConfig",
    "default_config_dir",
    "default_config_path",
    "default_log_file",
    "load_config_file",
    "require_credential",
    "resolve_config",
    "set_config_value",
    "write_default_config",
]
