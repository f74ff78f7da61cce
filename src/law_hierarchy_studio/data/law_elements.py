"""Law element records and kind-keyed lookup tables."""
from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Sequence, TypedDict

ElementTypeName = Literal[
    "book",
    "part",
    "title",
    "chapter",
    "section",
    "subsection",
    "article",
    "paragraph",
    "clause",
    "item",
    "subitem",
]


class ElementType(str, Enum):
    """Kinds of law elements, ordered by conventional nesting depth."""

    BOOK = "book"
    PART = "part"
    TITLE = "title"
    CHAPTER = "chapter"
    SECTION = "section"
    SUBSECTION = "subsection"
    ARTICLE = "article"
    PARAGRAPH = "paragraph"
    CLAUSE = "clause"
    ITEM = "item"
    SUBITEM = "subitem"


class _LawElementRequired(TypedDict):
    id: str
    law_id: str
    element_type: ElementTypeName
    element_number: str
    title: str
    content: str


class LawElement(_LawElementRequired, total=False):
    """Flat law element record as stored by the persistence layer."""

    parent_id: str | None
    order_position: int | float | None
    path: list[str]
    created_at: str


class LawElementTree(LawElement, total=False):
    """Law element copy with its ordered children."""

    children: list["LawElementTree"]


NUMBERED_TYPES: frozenset[str] = frozenset(
    {
        ElementType.ARTICLE.value,
        ElementType.PARAGRAPH.value,
        ElementType.CLAUSE.value,
        ElementType.ITEM.value,
        ElementType.SUBITEM.value,
    }
)

# Kinds that show a content preview under their title.
SUBTITLE_TYPES: frozenset[str] = frozenset(
    {
        ElementType.ARTICLE.value,
        ElementType.PARAGRAPH.value,
        ElementType.CLAUSE.value,
        ElementType.ITEM.value,
    }
)

ELEMENT_TYPE_LABELS: dict[str, str] = {
    "book": "Book",
    "part": "Part",
    "title": "Title",
    "chapter": "Chapter",
    "section": "Section",
    "subsection": "Subsection",
    "article": "Article",
    "paragraph": "Paragraph",
    "clause": "Clause",
    "item": "Item",
    "subitem": "Subitem",
}


def is_numbered(element: LawElement) -> bool:
    """Return True for kinds whose title is a canonical identifier (e.g. "Art. 293")."""

    return element.get("element_type") in NUMBERED_TYPES


def order_key(element: LawElement) -> int | float:
    """Return the sibling sort key; missing positions sort as 0."""

    return element.get("order_position") or 0


def type_label(element_type: str) -> str:
    """Return the human label of a kind, falling back to the raw value."""

    return ELEMENT_TYPE_LABELS.get(element_type, element_type)


def display_title(element: LawElement) -> str:
    """Return the text shown as the element's heading.

    Descriptive kinds prefer their content (which holds the heading text),
    numbered kinds show their identifier.

    Args:
        element: Law element record.

    Returns:
        Heading text, possibly empty.
    """
    title = element.get("title") or ""
    content = element.get("content") or ""
    if is_numbered(element):
        return title
    return content or title


def display_subtitle(element: LawElement, max_chars: int = 120) -> str | None:
    """Return a short content preview for numbered elements.

    Args:
        element: Law element record.
        max_chars: Maximum preview length before the ellipsis.

    Returns:
        Preview text or None when the kind has no preview.
    """
    content = element.get("content") or ""
    if element.get("element_type") not in SUBTITLE_TYPES or not content:
        return None
    suffix = "..." if len(content) > max_chars else ""
    return content[:max_chars] + suffix


def ensure_element_list(value: Any, name: str = "elements") -> Sequence[LawElement]:
    """Fail fast when a caller passes something that is not a list of records.

    Args:
        value: Candidate element collection.
        name: Argument name used in the error message.

    Returns:
        The same value, typed as a sequence of elements.

    Raises:
        TypeError: If ``value`` is not a list or tuple.
    """
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{name} must be a list of law elements, got {type(value).__name__}")
    return value


def unique_by_id(elements: Sequence[LawElement]) -> list[LawElement]:
    """Drop repeated ids, keeping the first occurrence in input order."""

    seen: set[str] = set()
    unique: list[LawElement] = []
    for element in elements:
        element_id = element["id"]
        if element_id in seen:
            continue
        seen.add(element_id)
        unique.append(element)
    return unique


__all__ = [
    "ElementType",
    "ElementTypeName",
    "LawElement",
    "LawElementTree",
    "NUMBERED_TYPES",
    "SUBTITLE_TYPES",
    "ELEMENT_TYPE_LABELS",
    "is_numbered",
    "order_key",
    "type_label",
    "display_title",
    "display_subtitle",
    "ensure_element_list",
    "unique_by_id",
]
