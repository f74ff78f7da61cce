"""Configuration utilities for Law Hierarchy Studio."""

from law_hierarchy_studio.config.loader import load_config
from law_hierarchy_studio.config.schema import AppConfig

__all__ = ["load_config", "AppConfig"]
