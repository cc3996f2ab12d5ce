"""Logging setup for the confswap command line.

Environment Variables:
    CONFSWAP_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "CONFSWAP_LOG_LEVEL"

logger = logging.getLogger("confswap")


def get_log_level(verbose: bool = False) -> int:
    """--verbose wins; otherwise read the level from the environment."""
    if verbose:
        return logging.DEBUG
    level_str = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(level_str)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(verbose: bool = False) -> None:
    """Send confswap log records to stderr. Safe to call more than once."""
    level = get_log_level(verbose)

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(name)-18s | %(levelname)-7s | %(message)s")
    )

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
