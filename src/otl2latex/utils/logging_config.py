"""Logging configuration for otl2latex."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Install a rich handler on the root logger.

    Args:
        level: Logging level name.
    """
    formatter = logging.Formatter(fmt="%(name)s: %(message)s", datefmt="%H:%M:%S")

    root = logging.getLogger()
    root.setLevel(level.upper())
    # Calling twice must not duplicate output
    for handler in root.handlers:
        if isinstance(handler, RichHandler):
            handler.setFormatter(formatter)
            return

    # Keep stdout free for documents written with --stdout
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
