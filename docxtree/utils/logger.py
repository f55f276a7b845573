"""
Logging configuration for docxtree.

Modules log through ``logging.getLogger(__name__)``; this module only wires
handlers for applications and scripts that want console or file output, with
optional rich formatting.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
PACKAGE_LOGGER = 'docxtree'


def _level(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return getattr(logging, level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", format_string: Optional[str] = None,
                      log_file: Optional[str] = None, use_rich: bool = False,
                      max_file_size: int = 10 * 1024 * 1024, backup_count: int = 5) -> logging.Logger:
    """
    Configure the ``docxtree`` package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for the plain and file handlers
        log_file: Log file path; adds a rotating file handler
        use_rich: Use :class:`rich.logging.RichHandler` for console output
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep

    Returns:
        The configured package logger
    """
    numeric_level = _level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    if use_rich:
        console_handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=True,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT,
                                                       datefmt='%Y-%m-%d %H:%M:%S'))
    console_handler.setLevel(numeric_level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=max_file_size,
                                           backupCount=backup_count, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        logger.addHandler(file_handler)

    return logger


def set_log_level(level: str) -> None:
    """
    Set log level on the package logger and all its handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = _level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)
