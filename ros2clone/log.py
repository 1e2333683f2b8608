"""Logging setup with Rich support."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# Pass as `extra=` on log calls whose message is fixed text with Rich markup.
MARKUP = {"markup": True}

_console: Console | None = None


def get_console() -> Console:
    """Return the shared stderr console used for log output."""
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console


def setup_logging(verbose: bool = False) -> None:
    """
    Route all `ros2clone` loggers to a Rich handler on stderr.

    Calling it again replaces the previous handler, so the level can be changed.
    Markup is off by default: messages carry user input (paths, tags, URLs).
    """
    logger = logging.getLogger("ros2clone")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(
            console=get_console(),
            show_path=verbose,
            show_time=False,
            rich_tracebacks=True,
            markup=False,
        )
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
