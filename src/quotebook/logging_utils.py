"""Logging setup for quotebook.

Library modules only call ``logging.getLogger(__name__)``; the CLI calls
``configure_logging`` once so warnings reach the terminal through Rich.
"""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "quotebook"


def configure_logging(level: Union[str, int] = "WARNING") -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Calling this again only updates the level.

    Args:
        level: Logging level name or number

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
