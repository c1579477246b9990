"""Logging configuration for the grader."""

import logging
import sys

from .config import LOG_FORMAT, LOGGER_NAME


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure and return the package logger.

    Logs go to stderr so they never mix with the report text printed on
    stdout. Warnings and above are shown by default; `verbose` enables
    debug output.

    Args:
        verbose: Whether to log at DEBUG level.

    Returns:
        The configured "labgrader" logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    # Prevent adding multiple handlers if called again
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
