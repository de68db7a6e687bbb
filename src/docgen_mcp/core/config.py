"""Configuration management for docgen-mcp."""

import argparse
import os
import sys
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from docgen_mcp.constants import EnvVars
from docgen_mcp.core.exceptions import ConfigurationError
from docgen_mcp.core.logging import configure_logging, get_logger
from docgen_mcp.models.config import DocGenConfig

# Global variable for config path (will be set by parse_args_and_get_config)
CONFIG_PATH: Optional[str] = None

# Active pipeline configuration (set by parse_args_and_get_config or lazily by get_config)
_active_config: Optional[DocGenConfig] = None


def validate_config_file(config_path: str) -> Dict[str, Any]:
    """Validate a docgen YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        The validated settings as a dictionary of DocGenConfig fields

    Raises:
        ConfigurationError: If config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    if config_data is None:
        raise ConfigurationError(config_path, "Config file is empty")

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    try:
        DocGenConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e

    return config_data


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in EnvVars.TRUTHY


def _settings_from_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect DocGenConfig fields present in the environment."""
    settings: Dict[str, Any] = {}
    if EnvVars.ENABLED in environ:
        settings["enabled"] = _env_flag(environ.get(EnvVars.ENABLED))
    if environ.get(EnvVars.API_KEY):
        settings["credential"] = environ[EnvVars.API_KEY]
    if environ.get(EnvVars.MODEL):
        settings["model"] = environ[EnvVars.MODEL]
    if environ.get(EnvVars.BASE_URL):
        settings["base_url"] = environ[EnvVars.BASE_URL]
    if environ.get(EnvVars.TIMEOUT):
        try:
            settings["timeout_seconds"] = float(environ[EnvVars.TIMEOUT])
        except ValueError:
            get_logger("config").warning("invalid_timeout_env", value=environ[EnvVars.TIMEOUT])
    return settings


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    load_env_file: bool = True,
) -> DocGenConfig:
    """Build the pipeline configuration.

    Precedence: YAML config file > environment variables > defaults.

    Args:
        config_path: Optional YAML config file
        environ: Environment mapping (os.environ by default)
        load_env_file: Whether to load a .env file into the process environment first

    Returns:
        Validated DocGenConfig

    Raises:
        ConfigurationError: If the file or the combined settings are invalid
    """
    if load_env_file:
        load_dotenv(override=False)
    env = os.environ if environ is None else environ

    settings = _settings_from_env(env)
    if config_path:
        settings.update(validate_config_file(config_path))

    try:
        return DocGenConfig(**settings)
    except ValidationError as e:
        raise ConfigurationError(config_path or "<environment>", f"Validation failed: {e}") from e


def get_config() -> DocGenConfig:
    """Return the active configuration, loading it from the environment on first use."""
    global _active_config
    if _active_config is None:
        _active_config = load_config(CONFIG_PATH)
    return _active_config


def set_config(config: Optional[DocGenConfig]) -> None:
    """Replace the active configuration (None forces a reload on next use)."""
    global _active_config
    _active_config = config


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    prog = None
    if sys.argv[0].endswith("main.py"):
        prog = "python main.py"

    parser = argparse.ArgumentParser(
        prog=prog,
        description="docgen MCP Server - Writes documentation comments for Java and Kotlin functions",
        epilog="""
environment variables:
  DOCGEN_CONFIG      Path to YAML config file (overridden by --config flag)
  OPENAI_ENABLED     Use the completion service instead of stub comments (true/false)
  OPENAI_API_KEY     Credential for the completion service
  OPENAI_MODEL       Completion model identifier
  OPENAI_BASE_URL    Base URL of an OpenAI-compatible API
  DOCGEN_TIMEOUT     Completion timeout in seconds
  LOG_LEVEL          Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  LOG_FILE           Path to log file (logs to stderr by default)
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to YAML config file (enabled, model, base_url, timeout_seconds)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )
    return parser


def _configure_logging_from_args(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments and environment.

    Precedence: --log-level/--log-file flags > env vars > defaults
    """
    log_level = args.log_level or os.environ.get("LOG_LEVEL", "INFO")
    log_file = args.log_file or os.environ.get("LOG_FILE")
    configure_logging(log_level=log_level, log_file=log_file)


def parse_args_and_get_config(argv: Optional[list] = None) -> DocGenConfig:
    """Parse command-line arguments and load the pipeline configuration.

    Note:
        Calls sys.exit(1) if the configuration is invalid.
    """
    global CONFIG_PATH

    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    _configure_logging_from_args(args)
    logger = get_logger("config")

    CONFIG_PATH = args.config or os.environ.get(EnvVars.CONFIG)
    try:
        config = load_config(CONFIG_PATH)
    except ConfigurationError as e:
        logger.error("config_validation_failed", config_path=CONFIG_PATH, error=str(e))
        sys.exit(1)

    set_config(config)
    logger.info(
        "config_loaded",
        config_path=CONFIG_PATH,
        mode=config.mode.value,
        model=config.model,
        timeout_seconds=config.timeout_seconds,
        credential_present=bool(config.credential),
    )
    return config
