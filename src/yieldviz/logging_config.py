"""Logging setup for applications that embed yieldviz.

Library modules only call ``logging.getLogger(__name__)``; nothing in the
geometry core configures handlers.  Front ends (the command line driver, a
notebook, a web app) call :func:`setup_logging` once.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "yieldviz"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the ``yieldviz`` logger.

    Args:
        level: Logging level (e.g. ``logging.DEBUG``, ``logging.INFO``).
        log_file: Optional path to also write the log to.

    Returns:
        The configured package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # re-running setup must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
    )

    console_handler = logging.StreamHandler(sys.stderr)
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


__all__ = ['PACKAGE_LOGGER', 'setup_logging']
