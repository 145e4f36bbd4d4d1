"""gemctl - send prompts to generative-AI providers from the shell."""

from gemctl._version import __version__
from gemctl.config import (
    ConfigFile,
    ResolvedConfig,
    load_config_file,
    require_credential,
    resolve_config,
    set_config_value,
)
from gemctl.dispatcher import PromptDispatcher
from gemctl.errors import (
    ConfigParseFailure,
    ConfigValueError,
    GemctlError,
    GenerationFailure,
    IOFailure,
    MissingCredential,
)
from gemctl.output import write_response
from gemctl.providers import (
    GenerationProvider,
    GenerationRequest,
    GenerationResult,
    MockProvider,
    ProviderError,
    create_provider,
)
from gemctl.retry import RetryPolicy

__all__ = [
    "ConfigFile",
    "ConfigParseFailure",
    "ConfigValueError",
    "GemctlError",
    "GenerationFailure",
    "GenerationProvider",
    "GenerationRequest",
    "GenerationResult",
    "IOFailure",
    "MissingCredential",
    "MockProvider",
    "PromptDispatcher",
    "ProviderError",
    "ResolvedConfig",
    "RetryPolicy",
    "__version__",
    "create_provider",
    "load_config_file",
    "require_credential",
    "resolve_config",
    "set_config_value",
    "write_response",
]
