from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every line written by the tool starts with one of the labels
INFO | WARN | ERROR | SUMMARY (plus DEBUG in --debug mode), so run output can be
grepped by scheduler logs without parsing timestamps.

Modules log through ``logging.getLogger(__name__)``; since they all live under
the ``hr_audit`` package their records propagate to the logger configured here.
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_level",
]

LOGGER_NAME = "hr_audit"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Render ``LABEL message``, or ``LABEL [sheet:row] message`` for row-level events.

    Audit code attaches the workbook location through ``extra``::

        logger.warning("...", extra={"sheet": "Employees", "row": 7})

    ``row`` is optional; a sheet-wide event carries only ``sheet``.
    """

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
        sheet = getattr(record, "sheet", None)
        if sheet is None:
            return f"{level_label} {record.getMessage()}"
        row = getattr(record, "row", None)
        location = sheet if row is None else f"{sheet}:{row}"
        return f"{level_label} [{location}] {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the application logger (idempotent).

    Args:
        level: Initial level for the logger and its stdout handler

    Returns:
        Configured ``hr_audit`` logger
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Handlers left by an earlier setup_logging() before reset_logging()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # stdout is the only sink; the root logger must not echo audit lines
    logger.propagate = False

    _logger = logger
    return logger


def set_level(level: int | str) -> None:
    logger = get_logger()
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
