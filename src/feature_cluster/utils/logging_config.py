"""
Logging setup for Feature Cluster.

Modules obtain their logger with ``get_logger(__name__)``; entry points
call ``setup_logging`` once.
"""

import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_NAME = "feature_cluster"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    fmt: Optional[str] = None,
    stream=None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level, as an int or a level name ("DEBUG", "INFO", ...)
        fmt: Optional format string (defaults to DEFAULT_FORMAT)
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package-level logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers so repeated calls don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for *name* (normally the calling module's ``__name__``)."""
    return logging.getLogger(name)
