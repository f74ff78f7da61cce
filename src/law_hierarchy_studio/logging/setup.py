"""Logging setup utilities."""
from __future__ import annotations

import logging

from law_hierarchy_studio.config.constants import option_value
from law_hierarchy_studio.config.schema import LoggingConfig
from law_hierarchy_studio.logging.formatters import default_formatter


def configure_logging(cfg: LoggingConfig) -> None:
    """Configure the root logger with a stream and a file handler.

    Args:
        cfg: Logging configuration; ``run.log`` is written under ``cfg.log_dir``.
    """
    fmt = default_formatter()
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(fmt)

    cfg.log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(cfg.log_dir / "run.log", encoding="utf-8")
    file_handler.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(option_value(cfg.level))
    root.handlers = [stream_handler, file_handler]


__all__ = ["configure_logging"]
