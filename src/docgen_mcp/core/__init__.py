"""Core infrastructure for docgen-mcp."""

from docgen_mcp.core.config import (
    get_config,
    load_config,
    parse_args_and_get_config,
    set_config,
    validate_config_file,
)
from docgen_mcp.core.exceptions import (
    CompletionCancelledError,
    CompletionError,
    CompletionTimeoutError,
    ConfigurationError,
    DocGenError,
    MissingCredentialError,
    SignatureExtractionError,
    UnsupportedLanguageError,
)
from docgen_mcp.core.logging import (
    configure_logging,
    get_logger,
)
from docgen_mcp.core.sentry import (
    init_sentry,
)

__all__ = [
    # Exceptions
    "DocGenError",
    "ConfigurationError",
    "MissingCredentialError",
    "UnsupportedLanguageError",
    "SignatureExtractionError",
    "CompletionError",
    "CompletionTimeoutError",
    "CompletionCancelledError",
    # Logging
    "configure_logging",
    "get_logger",
    # Config
    "get_config",
    "load_config",
    "set_config",
    "validate_config_file",
    "parse_args_and_get_config",
    # Sentry
    "init_sentry",
]
