"""Logging setup for the supercommit CLI.

Verbosity follows the -v count:
- 0: WARNING
- 1 (-v): INFO, what was parsed, skipped or written
- 2+ (-vv): DEBUG, raw lines and resolved settings
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "supercommit"


def _level_for(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, level: str | None = None) -> logging.Logger:
    """Configure the supercommit logger and return it.

    An explicit level name (e.g. from SUPERCOMMIT_LOG_LEVEL) wins over verbosity.
    Safe to call more than once; handlers are replaced, not stacked.
    """
    resolved = _level_for(verbosity)
    if level:
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbosity >= 2,
        show_path=verbosity >= 2,
        markup=False,
    )
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or LOGGER_NAME)
