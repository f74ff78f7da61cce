"""Logging formatters."""
from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def default_formatter(fmt: str = DEFAULT_FORMAT) -> logging.Formatter:
    """Create the pipe-separated formatter shared by all handlers.

    Args:
        fmt: Format string.

    Returns:
        Configured logging formatter.
    """
    return logging.Formatter(fmt)


__all__ = ["DEFAULT_FORMAT", "default_formatter"]
