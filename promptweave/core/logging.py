"""
Structured logging configuration for promptweave.

Supports both human-readable (development) and JSON (log aggregation) formats.
The library itself never installs handlers on import; applications opt in
by calling configure_logging().
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# LogRecord attributes that are not treated as "extra" fields
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName",
))


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Extra fields passed via `logger.debug(..., extra={...})` are emitted as
    top-level keys, so render summaries (message counts, roles) are queryable.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.pathname:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def configure_logging(
    level: str = "INFO",
    format_type: str = "text",
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for promptweave (or the root logger).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" for structured, "text" for human-readable
        logger_name: Logger to configure. Defaults to the root logger.

    Returns:
        The configured logger
    """
    target = logging.getLogger(logger_name)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers so repeated calls don't duplicate output
    target.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if format_type.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    target.addHandler(handler)
    return target


def configure_from_settings(settings=None) -> logging.Logger:
    """Configure the promptweave logger from environment-driven settings."""
    if settings is None:
        from promptweave.settings import get_settings
        settings = get_settings()

    level = "DEBUG" if settings.debug else settings.log_level
    return configure_logging(
        level=level,
        format_type=settings.log_format,
        logger_name="promptweave",
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
