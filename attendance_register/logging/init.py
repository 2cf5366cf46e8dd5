from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Application logger: ``<LABEL> <message>`` lines on stdout.

Labels are DEBUG | INFO | WARN | ERROR | SUMMARY. Module loggers
(``logging.getLogger(__name__)`` under ``attendance_register``) propagate to
the application logger; the application logger itself does not propagate to
the root logger.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "reset_logging",
]

LOGGER_NAME = "attendance_register"

# INFO(20) と WARNING(30) の間
SUMMARY_LEVEL = 25
SUMMARY_LABEL = "SUMMARY"

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: SUMMARY_LABEL,
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Configure the application logger once; later calls return it unchanged.

    Args:
        level: Initial level for the logger and its handler
        stream: Output stream (stdout when omitted, resolved at call time)
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, SUMMARY_LABEL)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def log_summary(line: str) -> None:
    """Emit a run summary at SUMMARY level.

    ``line`` may already carry the ``SUMMARY`` label (as rendered by
    ``services.summary``); it is not repeated.
    """
    prefix = f"{SUMMARY_LABEL} "
    if line.startswith(prefix):
        line = line[len(prefix):]
    get_logger().log(SUMMARY_LEVEL, line)


def set_debug() -> None:
    logger = get_logger()
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)


def reset_logging() -> None:
    """Forget the configured logger (tests)."""
    global _logger
    _logger = None
