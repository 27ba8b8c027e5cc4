"""
Logging configuration for the crash analysis package.

Handlers live on the package logger ``crash_analysis``; services get child
loggers (``crash_analysis.summary_materializer`` and so on) that propagate
to it, so the console and file handlers are attached once per process.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from crash_analysis.core.config import get_settings

PACKAGE_LOGGER = "crash_analysis"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_package_logger(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Attach console and file handlers to the package logger.

    Calling it again replaces the handlers, e.g. to switch log files.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. If None, uses settings value

    Returns:
        The package logger
    """
    settings = get_settings()
    level = level or settings.log_level
    log_file = log_file or settings.log_file_path

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper()))
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(fmt=SIMPLE_FORMAT, datefmt="%H:%M:%S"))
    package_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(fmt=DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        package_logger.addHandler(file_handler)

    return package_logger


def setup_logging(name: str = PACKAGE_LOGGER, level: Optional[str] = None) -> logging.Logger:
    """
    Return a service logger under the package logger.

    The package handlers are configured on first use.

    Args:
        name: Service name, e.g. "crash_reporter"
        level: Optional level override for this service only

    Returns:
        Configured logger instance
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        configure_package_logger()

    logger = get_logger(name)
    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance under the package namespace.

    Args:
        name: Logger name, with or without the package prefix

    Returns:
        Logger instance
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(PACKAGE_LOGGER).getChild(name)
