"""Logger configuration for the command line runner.

Library modules only call ``logging.getLogger(__name__)``; handlers are attached once,
to the package logger, by :func:`setup_logger`.
"""
from __future__ import annotations

import logging
import sys
from typing import Dict, Optional

LOG_LEVELS: Dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LEVEL = logging.WARNING


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logger(
    name: str = "watersort",
    level: int = DEFAULT_LEVEL,
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Send ``name`` and its child loggers to stderr and, optionally, ``log_file``.

    Repeated calls replace the handlers from the previous call.
    """

    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    logger.setLevel(level)
    formatter = logging.Formatter(log_format)
    # stdout carries the solution text
    _attach(logger, logging.StreamHandler(sys.stderr), level, formatter)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="a", encoding="utf-8"), level, formatter)
    logger.propagate = False

    logger.debug("Logging configured: level=%s file=%s", logging.getLevelName(level), log_file or "-")
    return logger


def get_level_from_string(level_str: str) -> int:
    """Map a level name such as ``"info"`` to its constant; unknown names give WARNING."""

    return LOG_LEVELS.get(level_str.lower(), DEFAULT_LEVEL)
