"""Exception hierarchy for gemctl."""

from __future__ import annotations


class GemctlError(Exception):
    """Base exception for all gemctl errors."""


class ConfigParseFailure(GemctlError):
    """Configuration file is not valid YAML or does not match the schema."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigValueError(GemctlError):
    """A configuration key or value cannot be applied."""


class MissingCredential(GemctlError):
    """No API key could be resolved for the selected provider."""

    def __init__(self, provider: str, env_var: str) -> None:
        super().__init__(
            f"{provider} API key not configured. "
            f"Set {env_var} or run: gemctl config-set --key {provider}_api_key --value <key>"
        )
        self.provider = provider
        self.env_var = env_var


class GenerationFailure(GemctlError):
    """The provider call failed.

    Attributes:
        provider: Name of the provider that failed, if known.
        status_code: HTTP status code reported by the provider, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class IOFailure(GemctlError):
    """Writing a file (response output or configuration) failed."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
