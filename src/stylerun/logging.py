"""Console logging setup for stylerun commands."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "stylerun"


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send stylerun records to stderr through rich, replacing earlier handlers."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
