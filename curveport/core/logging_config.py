"""
Logging configuration for curveport.

Library modules only call ``get_logger(__name__)``; handlers are installed
by applications through ``setup_logging``.
"""

import functools
import logging
import time
from typing import Optional

LOGGER_NAME = "curveport"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the curveport namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger instance
    """
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the curveport root logger.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO)
        log_file: Optional file path for logging output
        fmt: Log record format

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers so repeated setup calls don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


class LogContext:
    """
    Temporarily change the level of a logger.

    Usage:
        with LogContext("curveport.core.sampler", logging.DEBUG):
            sample(prop, time_range)
    """

    def __init__(self, name: str = LOGGER_NAME, level: int = logging.DEBUG):
        self.logger = get_logger(name)
        self.level = level
        self._previous = None

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self._previous)
        return False


def log_performance(func):
    """Decorator logging the wall time of a call at DEBUG level."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            logger.debug(f"{func.__qualname__} took {elapsed:.2f}ms")

    return wrapper


__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "log_performance",
]
