"""Logging setup for applications embedding the engine.

Engine modules only call ``logging.getLogger(__name__)``; nothing is
printed unless the host application configures handlers, either itself
or through :func:`setup_logger`.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

from . import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: str = "budgetwise",
    log_file: str = "budgetwise.log",
    level: Optional[Union[int, str]] = None,
) -> logging.Logger:
    """Configure and return a logger with a console handler and, when a log
    directory is configured, a rotating file handler."""

    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else config.LOG_LEVEL)

    if logger.handlers and not all(isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    log_dir = config.ensure_log_directory()
    if log_dir is not None:
        file_handler = RotatingFileHandler(
            log_dir / log_file,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding='utf-8',
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
