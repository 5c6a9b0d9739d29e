"""
Logging configuration for trek.

The level and an optional log file are read from TREK_LOG_LEVEL and
TREK_LOG_FILE the first time the package is imported.
"""

import logging
import os
import sys
from typing import Optional, Union


def _level_from_env(default: int = logging.WARNING) -> int:
    name = os.getenv("TREK_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logger(
    name: str = "trek",
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: TREK_LOG_LEVEL or WARNING)
        log_file: Optional file path for logging (default: TREK_LOG_FILE)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = _level_from_env()
    elif isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Handlers are attached once; later calls only adjust the level
    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.setLevel(level)

    # Format: timestamp - module - level - message
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = log_file or os.getenv("TREK_LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Default logger instance, created once at import time
logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Child loggers (e.g. "trek.collector") inherit the package logger's
    handlers and level, and their name tells which stage wrote a line.

    Args:
        module_name: Name of the module (e.g., 'collector', 'clutter')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"trek.{module_name}")
