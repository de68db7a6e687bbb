"""Structured logging for docgen-mcp.

Events are rendered as one JSON object per line. Output goes to stderr (or a
log file) because stdout carries the MCP stdio transport.
"""
import sys
from typing import IO, Any, List, Optional

import structlog

_LOG_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}

# Handle opened for --log-file / LOG_FILE; replaced on reconfiguration
_log_file_handle: Optional[IO[str]] = None


def _open_log_target(log_file: Optional[str]) -> IO[str]:
    global _log_file_handle
    if _log_file_handle is not None:
        _log_file_handle.close()
        _log_file_handle = None

    if log_file is None:
        return sys.stderr
    _log_file_handle = open(log_file, "a", encoding="utf-8")
    return _log_file_handle


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure structlog with JSON output.

    Calling this again closes a log file opened by a previous call.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR (unknown values mean INFO)
        log_file: Append to this file instead of stderr
    """
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_LOG_LEVELS.get(log_level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_open_log_target(log_file)),
        # Loggers must pick up a new target after reconfiguration
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``name`` (module or tool name)."""
    return structlog.get_logger(name)
