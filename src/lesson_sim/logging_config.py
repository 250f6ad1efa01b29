# MIT License (see LICENSE)
"""
Logging setup for the lesson_sim package.

Modules log through logging.getLogger(__name__); this function attaches the
handlers to the package logger once, at application start-up.
"""
from __future__ import annotations
import logging
import sys

from .config import log_level_from_env


def setup_logging(level: int | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'lesson_sim' logger.

    Args:
        level: Logging level; defaults to LESSON_SIM_LOG_LEVEL or INFO.
        log_file: Optional path to also write logs to.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = log_level_from_env()

    logger = logging.getLogger("lesson_sim")
    logger.setLevel(level)

    # Re-running setup must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
