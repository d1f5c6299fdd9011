"""
Logging utilities for the command console.
Every component logger writes through one Rich console.
"""

import logging
from typing import Optional, Set

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

console = Console(theme=Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "blue",
}))

_default_level = logging.INFO
_managed: Set[str] = set()


def _rich_handler(level: int) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(name)s] %(message)s", datefmt="%H:%M:%S"))
    return handler


def set_default_level(level: int) -> None:
    """Apply ``level`` to every console logger, existing and future."""
    global _default_level
    _default_level = level
    for name in list(_managed):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def setup_logging(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Attach a fresh RichHandler to the logger called ``name``.

    Args:
        name: Logger name, shown in brackets before each message
        level: Logging level (default: the console-wide level)

    Returns:
        Configured logger instance
    """
    level = _default_level if level is None else level
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = [_rich_handler(level)]
    logger.propagate = False
    _managed.add(name)
    return logger


def get_logger(name: str) -> logging.Logger:
    return setup_logging(name)


class LoggerMixin:
    """Gives a class its own named console logger."""

    def __init__(self, name: str):
        self.logger = setup_logging(name)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def success(self, message: str) -> None:
        self.logger.info(f"✔ {message}")
