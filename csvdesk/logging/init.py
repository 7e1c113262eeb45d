from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

All csvdesk modules log through ``logging.getLogger(__name__)``; their records
propagate to the ``csvdesk`` application logger configured here, which writes
one line per record to stdout:

    INFO loaded customers.csv: 120 rows, 4 columns
    WARN dropped 2 row(s) with a blank key
    SUMMARY file=customers.csv rows=120 view=12 page=1/1 ...
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "reset_logging",
]

APP_LOGGER_NAME = "csvdesk"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter that prefixes each message with a short level label."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def _stdout_handler() -> logging.Handler:
    # Level stays NOTSET: the app logger's level alone decides what is printed
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    return handler


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the ``csvdesk`` logger once per process and return it.

    Records from ``csvdesk.*`` module loggers reach stdout through exactly one
    handler; nothing is passed on to the root logger, so a host application
    (or pytest) that configures root logging never sees duplicate lines.
    Calling again after :func:`reset_logging` rebuilds the handler.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.addHandler(_stdout_handler())
    app_logger.setLevel(level)
    app_logger.propagate = False

    _logger = app_logger
    return app_logger


def get_logger() -> logging.Logger:
    """Get the configured application logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def set_debug(enabled: bool = True) -> None:
    """Switch the application logger to DEBUG (or back to INFO)."""
    get_logger().setLevel(logging.DEBUG if enabled else logging.INFO)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
