"""
log.py

Responsibility: configure console logging once for the CLI.
"""

from __future__ import annotations

import logging

_LOGGER_CONFIGURED = False


def level_for_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0) -> None:
    """
    Attach a console handler to the `svggloo` logger.

    Calling it again only adjusts the level.
    """
    global _LOGGER_CONFIGURED
    level = level_for_verbosity(verbosity)
    logger = logging.getLogger("svggloo")
    logger.setLevel(level)
    if _LOGGER_CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    _LOGGER_CONFIGURED = True
