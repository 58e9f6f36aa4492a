"""Logging initialization using loguru."""

from __future__ import annotations

import sys

from loguru import logger


def init_logging(verbose: bool = False) -> None:
    """Replace loguru's default handler with a plain stderr sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="{level}: {message}",
        backtrace=False,
        diagnose=False,
        level="DEBUG" if verbose else "INFO",
    )
