"""Logging setup for the trade journal."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "tradejournal"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the package logger to write through rich on stderr.

    Calling this again only updates the level; handlers are not duplicated.

    Args:
        level: Log level name.

    Returns:
        The ``tradejournal`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
