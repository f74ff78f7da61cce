"""Config loader utilities."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from law_hierarchy_studio.config.schema import AppConfig

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")


def load_config(path: Path) -> AppConfig:
    """Load application config from YAML.

    ``${dotted.path}`` placeholders are replaced with other values of the
    same file, and a relative ``data.elements_path`` is taken relative to
    the config file's directory.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Parsed `AppConfig` object.

    Raises:
        ValueError: If the file does not contain a mapping.
    """
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at top level.")
    resolved = _resolve_placeholders(data)

    data_section = resolved.get("data")
    if isinstance(data_section, dict) and isinstance(data_section.get("elements_path"), str):
        elements_path = Path(data_section["elements_path"])
        if not elements_path.is_absolute():
            data_section["elements_path"] = path.parent / elements_path
    return AppConfig(**resolved)


def _lookup(root: dict[str, Any], dotted: str) -> Any:
    """Return the value at a dotted path, or None when missing."""

    cur: Any = root
    for part in dotted.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _resolve_placeholders(data: dict[str, Any]) -> dict[str, Any]:
    """Resolve ${...} placeholders using loaded config values."""

    def resolve(obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: resolve(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [resolve(v) for v in obj]
        if isinstance(obj, str):
            def repl(match: re.Match[str]) -> str:
                val = _lookup(data, match.group(1))
                return str(val) if val is not None else match.group(0)

            return PLACEHOLDER_PATTERN.sub(repl, obj)
        return obj

    return resolve(data)


__all__ = ["load_config"]
