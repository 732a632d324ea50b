"""
Logging utilities for table-qa.

Every module logger gets its own colored stderr handler; stdout is reserved
for generated Q&A text. A log file, when configured, hangs off the
``table_qa`` package logger so records from all stages reach it.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
import colorlog

PACKAGE_LOGGER = 'table_qa'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logger(
    name: str,
    level: str = "WARNING",
    colorize: bool = True
) -> logging.Logger:
    """
    Set up a logger with a single stderr console handler.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        colorize: Whether to colorize console output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = []

    if colorize:
        formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS
        )
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def attach_file_handler(
    log_file: str,
    name: str = PACKAGE_LOGGER
) -> logging.FileHandler:
    """
    Write every record under ``name`` to ``log_file``.

    Replaces any file handler previously attached to the same logger.

    Example:
        >>> attach_file_handler("logs/table_qa.log")
    """
    logger = logging.getLogger(name)

    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    return file_handler


def get_logger(name: str) -> logging.Logger:
    """Get an existing logger or create one with a console handler."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger = setup_logger(name)

    return logger


def set_level(level: str) -> None:
    """Apply a log level to every table_qa logger created so far."""
    numeric_level = getattr(logging, level.upper())
    for name in list(logging.root.manager.loggerDict):
        if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + '.'):
            logging.getLogger(name).setLevel(numeric_level)
