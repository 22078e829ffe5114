# src/netseg/logging_utils.py
"""Logging configuration helpers."""
from __future__ import annotations
import logging

from netseg.errors import NetsegError

DEFAULT_LOGGER_NAME = "netseg"
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    level: int = DEFAULT_LOG_LEVEL,
    *,
    logger_name: str = DEFAULT_LOGGER_NAME,
    fmt: str = DEFAULT_LOG_FORMAT,
    force: bool = False,
) -> logging.Logger:
    logging.basicConfig(level=level, format=fmt, force=force)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    return logger


def log_exception(logger: logging.Logger, exc: BaseException) -> str:
    """Log a short message for `exc` and the traceback at DEBUG level."""
    if isinstance(exc, NetsegError):
        message = exc.log_message()
    else:
        message = f"Unexpected error: {exc}"
    logger.error(message)
    logger.debug("Detailed traceback:", exc_info=exc)
    return message


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_LOG_FORMAT",
    "configure_logging",
    "log_exception",
]
