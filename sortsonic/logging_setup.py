"""
Logging Configuration
Sets up the package logger.
"""
import logging
import sys
from typing import Optional, Union

from . import settings


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the 'sortsonic' logger.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
        log_file: Optional path to also write logs to.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("sortsonic")
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice (tests, restarts)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(settings.LOG_FORMAT, datefmt=settings.LOG_DATEFMT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
