"""Logging configuration for the pzt CLI."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a rich stderr handler to the "pzt" logger.

    Level falls back to PZT_LOG_LEVEL, then WARNING. Calling this again
    replaces the handler instead of stacking a second one.
    """
    if level is None:
        level = os.environ.get("PZT_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("pzt")
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
