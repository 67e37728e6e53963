"""Centralized logging configuration for bqddl."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "configure_logging"]

_LOG_LEVEL_ENV: Final[str] = "BQDDL_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "WARNING"

console = Console(stderr=True)


def _resolve_level(verbose: bool) -> int:
    """Return the logging level from --verbose or the environment."""
    if verbose:
        return logging.DEBUG
    level_name = os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME).upper()
    return getattr(logging, level_name, logging.WARNING)


def configure_logging(verbose: bool = False) -> None:
    """Install a single Rich handler on the bqddl logger."""
    logger = logging.getLogger("bqddl")

    handler = next(
        (h for h in logger.handlers if isinstance(h, RichHandler)),
        None,
    )
    if handler is None:
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.setLevel(_resolve_level(verbose))
    logger.propagate = False
