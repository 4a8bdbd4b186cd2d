"""Logging configuration using Rich and standard logging."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, log_level: str = "WARNING") -> None:
    """
    Configure the root logger with a Rich handler on stderr.

    Args:
        verbose: If True, sets the level to DEBUG.
        log_level: Level used when not verbose (default: WARNING).
    """
    if verbose:
        log_level = "DEBUG"

    level = getattr(logging, log_level.upper(), logging.WARNING)

    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    if logger.handlers:
        logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        show_time=verbose,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
