"""
Logging configuration for sectest.

Provides a plain console format for interactive use and a structured JSON
format for CI pipelines that collect log lines.
"""

import json
import logging
from typing import Any

from .constants import DEFAULT_LOG_LEVEL

LOGGER_NAME = "sectest"

PLAIN_FORMAT = "[%(asctime)s] %(name)s %(levelname)s: %(message)s"

# Extra fields copied into JSON log entries when a call passes them via extra=
STRUCTURED_FIELDS = (
    "check",
    "vulnerable",
    "passed",
    "failed",
    "project_type",
    "report_type",
    "format",
    "path",
    "command",
    "error",
)


class SecTestLogFormatter(logging.Formatter):
    """Formatter that renders each record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    json_format: bool = False,
    enable_console: bool = True,
) -> logging.Logger:
    """
    Configure the sectest logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to
            SECTEST_LOG_LEVEL.
        log_file: Path to a log file (optional)
        json_format: Emit structured JSON lines instead of plain text
        enable_console: Whether to log to stderr

    Returns:
        The configured package logger
    """
    level_name = (log_level or DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Clear existing handlers so repeated CLI invocations in one process
    # do not duplicate output
    logger.handlers.clear()

    formatter: logging.Formatter
    if json_format:
        formatter = SecTestLogFormatter()
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the sectest package logger."""
    return logging.getLogger(LOGGER_NAME)
