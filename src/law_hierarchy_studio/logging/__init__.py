"""Logging helpers for Law Hierarchy Studio."""

from law_hierarchy_studio.logging.setup import configure_logging

__all__ = ["configure_logging"]
