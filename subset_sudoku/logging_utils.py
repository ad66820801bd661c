"""Logging setup shared by the command line tools."""

from __future__ import annotations
import logging
import os

# Parent logger of every module in the package
LOGGER_NAME = "subset_sudoku"

LOG_LEVEL_ENV = "SUBSET_SUDOKU_LOG_LEVEL"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Return the package logger, attaching a console handler on first use.

    ``verbose`` selects INFO over WARNING; the SUBSET_SUDOKU_LOG_LEVEL
    environment variable overrides both.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    level = os.environ.get(LOG_LEVEL_ENV)
    if level:
        logger.setLevel(level.upper())
    else:
        logger.setLevel(logging.INFO if verbose else logging.WARNING)

    return logger
