"""
Structured JSON logging with pairing-key propagation.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from observer import config

from .context import get_cache_key

_RESERVED_ATTRS = frozenset(
    (
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "taskName",
    )
)


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Output format:
    {
        "timestamp": "2024-01-15T10:30:00.000Z",
        "level": "INFO",
        "logger": "observer.compare",
        "message": "Pattern persistence detected across weekly and yearly",
        "cache_key": "wallet-1::2024-12-31",
        ...
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).strftime(
                "%Y-%m-%dT%H:%M:%S.%f"
            )[:-3]
            + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        cache_key = get_cache_key()
        if cache_key:
            log_obj["cache_key"] = cache_key

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_obj[key] = value

        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for local development."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        cache_key = get_cache_key()
        key_str = f"[{cache_key}] " if cache_key else ""
        return f"{timestamp} [{record.levelname}] {record.name}: {key_str}{record.getMessage()}"


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    logger_name: str = "observer",
) -> logging.Logger:
    """
    Configure logging for the observer package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to config.LOG_LEVEL.
        json_format: Use JSON format. If None, auto-detect based on environment.
        logger_name: Logger to configure; the package logger by default.

    Returns:
        The configured logger.
    """
    if json_format is None:
        # Use JSON in production (when not a TTY), human format in dev
        json_format = not sys.stderr.isatty()

    target = logging.getLogger(logger_name)
    target.setLevel(getattr(logging, (level or config.LOG_LEVEL).upper()))

    # Remove existing handlers
    for handler in target.handlers[:]:
        target.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    target.addHandler(handler)
    return target


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("Processing", extra={"count": 42})
    """
    return logging.getLogger(name)
