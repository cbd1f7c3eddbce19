"""Logging configuration for the tasker command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Route ``tasker.*`` loggers to stderr through rich.

    Warnings and errors are always shown; ``verbose`` adds debug output.
    Safe to call more than once; earlier handlers are replaced.
    """
    logger = logging.getLogger("tasker")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
