"""
MODGEN Logging Utilities

Simple logging setup using Python's standard logging library.

Usage:
    from modgen.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Generation started")
"""

import logging
import sys
from typing import Optional


DEFAULT_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str = "modgen", level: str = "INFO") -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ or module name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logging.Logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
):
    """
    Configure logging for the modgen package.

    Generator messages go to stderr so they never mix with CLI output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom log format
        date_format: Custom date format
    """
    logger = get_logger("modgen", level)
    logger.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=date_format or DEFAULT_DATE_FORMAT)
    for handler in logger.handlers:
        handler.setFormatter(formatter)
        handler.setLevel(getattr(logging, level.upper()))

    return logger
