"""
Logging setup for applications using envbind.

The library itself only emits through ``logging.getLogger(__name__)`` and never
installs handlers. Applications that want envbind's diagnostics call
``configure_logging`` once at startup.

Format: 2026-01-06T14:05:52Z [source] LEVEL message

Environment Variables:
    LOG_LEVEL: "TRACE", "DEBUG" or "INFO" (default)
               - DEBUG: which source each field was resolved from
               - TRACE: the raw values themselves

Usage:
    from envbind.logging_config import configure_logging

    configure_logging(source="myapp")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime

# Below DEBUG; raw config values are only logged at this level
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class ISO8601Formatter(logging.Formatter):
    """Formatter producing ISO8601 timestamps in UTC.

    Output format: 2026-01-06T14:05:52Z [source] LEVEL message
    """

    def __init__(self, source: str = "app"):
        """Initialize formatter with a source identifier.

        Args:
            source: Identifier shown in brackets (e.g., "api", "worker")
        """
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with ISO8601 UTC timestamp."""
        timestamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()

        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
            message = f"{message}\n{exception_text}"

        return f"{timestamp} [{self.source}] {record.levelname} {message}"


def level_from_env(debug: bool | None = None) -> int:
    """Read the log level from LOG_LEVEL, falling back to INFO."""
    log_level_env = os.getenv("LOG_LEVEL", "").upper()
    if log_level_env == "TRACE":
        return TRACE
    if log_level_env == "DEBUG" or debug:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    source: str = "app",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Configure the root logger with the ISO8601 stdout handler.

    Args:
        source: Source identifier for log messages
        level: Logging level (defaults to INFO, or DEBUG/TRACE from LOG_LEVEL env var)
        debug: Enable debug mode (overrides level to DEBUG)

    Returns:
        Configured root logger
    """
    if level is None:
        level = level_from_env(debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    root_logger.addHandler(handler)

    return root_logger
