"""Loader for law element exports from the persistence layer."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, cast

from law_hierarchy_studio.data.law_elements import ElementType, LawElement

logger = logging.getLogger(__name__)

_ELEMENT_TYPES = {member.value for member in ElementType}
_REQUIRED_FIELDS = ("id", "law_id", "element_type")
_TEXT_FIELDS = ("element_number", "title", "content")


def load_law_elements(path: Path, law_id: str | None = None) -> list[LawElement]:
    """Load law element records exported as JSON or JSON Lines.

    Accepted layouts are a top-level list of records, an object holding an
    ``elements`` list, or one record per line for ``.jsonl`` files. Records
    keep their input order; no sorting is applied here.

    Args:
        path: Path to the export file.
        law_id: When given, keep only the elements of this law.

    Returns:
        List of `LawElement` records.

    Raises:
        ValueError: When the file layout or a record is invalid.
    """
    raw_records = _read_records(path)

    elements: list[LawElement] = []
    for index, raw in enumerate(raw_records):
        element = _parse_record(raw, index)
        if law_id is not None and element["law_id"] != law_id:
            continue
        elements.append(element)

    logger.info("Loaded %d law elements from %s", len(elements), path)
    return elements


def _read_records(path: Path) -> list[Any]:
    """Read raw records from JSON or JSON Lines."""

    if path.suffix == ".jsonl":
        records: list[Any] = []
        with path.open("r", encoding="utf-8") as fp:
            for line in fp:
                line = line.strip()
                if line:
                    records.append(json.loads(line))
        return records

    with path.open("r", encoding="utf-8") as fp:
        loaded = json.load(fp)
    if isinstance(loaded, list):
        return loaded
    if isinstance(loaded, dict) and isinstance(loaded.get("elements"), list):
        return loaded["elements"]
    raise ValueError("Law element export must be a list or an object with key 'elements' as a list.")


def _parse_record(raw: Any, index: int) -> LawElement:
    """Validate one raw record and normalise optional fields."""

    if not isinstance(raw, dict):
        raise ValueError(f"Element #{index} must be an object, got {type(raw).__name__}")
    for field in _REQUIRED_FIELDS:
        value = raw.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Element #{index}: '{field}' is required and must be a non-empty string.")
    if raw["element_type"] not in _ELEMENT_TYPES:
        raise ValueError(f"Element #{index}: unknown element_type {raw['element_type']!r}")

    record: dict[str, Any] = dict(raw)
    for field in _TEXT_FIELDS:
        value = record.get(field)
        record[field] = "" if value is None else str(value)

    position = record.get("order_position")
    if position is not None and not isinstance(position, (int, float)):
        raise ValueError(f"Element #{index}: order_position must be a number or null.")
    parent_id = record.get("parent_id")
    if parent_id is not None and not isinstance(parent_id, str):
        record["parent_id"] = str(parent_id)
    return cast(LawElement, record)


__all__ = ["load_law_elements"]
