"""Render a law element and its descendants as ordered plain text."""
from __future__ import annotations

from enum import Enum
from typing import Sequence, TypedDict

from law_hierarchy_studio.data.law_elements import (
    ElementType,
    LawElement,
    ensure_element_list,
    order_key,
    unique_by_id,
)
from law_hierarchy_studio.hierarchy.builder import DEFAULT_MAX_DEPTH, resolve_parents

DEFAULT_DISPLAY_MAX_CHARS = 2000
DEFAULT_ELLIPSIS = "..."


class FlattenMode(str, Enum):
    """Output modes of the flattener."""

    DISPLAY = "display"
    FULL = "full"


class DisplayContent(TypedDict):
    """Length-capped text with truncation diagnostics."""

    content: str
    truncated: bool
    total_length: int


def ordered_descendants(
    element: LawElement, all_elements: Sequence[LawElement], max_depth: int = DEFAULT_MAX_DEPTH
) -> list[LawElement]:
    """Return every descendant of ``element`` in pre-order.

    Siblings are ordered by ``order_position`` with input order breaking ties.

    Args:
        element: Subtree root; it does not need to be part of ``all_elements``.
        all_elements: Every element of the law.
        max_depth: Depth limit used to resolve parent chains, as for the tree.

    Returns:
        Descendant records, parents before children.
    """
    unique = unique_by_id(ensure_element_list(all_elements, "all_elements"))
    parents = resolve_parents(unique, max_depth=max_depth)

    children: dict[str, list[LawElement]] = {}
    for candidate in unique:
        parent_id = parents[candidate["id"]]
        if parent_id is not None:
            children.setdefault(parent_id, []).append(candidate)
    for siblings in children.values():
        siblings.sort(key=order_key)

    descendants: list[LawElement] = []
    visited = {element["id"]}
    stack = list(reversed(children.get(element["id"], [])))
    while stack:
        current = stack.pop()
        if current["id"] in visited:
            continue
        visited.add(current["id"])
        descendants.append(current)
        stack.extend(reversed(children.get(current["id"], [])))
    return descendants


def _descendant_lines(element: LawElement) -> list[str]:
    """Lines contributed by one descendant."""

    title = element.get("title") or ""
    content = element.get("content") or ""
    if element.get("element_type") == ElementType.SUBSECTION.value:
        # Subsection headings repeat their title as content.
        text = content or title
        return [text] if text else []

    lines: list[str] = []
    if title:
        lines.append(title)
    if content and content != title:
        lines.append(content)
    return lines


def render_hierarchical_content(
    element: LawElement, all_elements: Sequence[LawElement], max_depth: int = DEFAULT_MAX_DEPTH
) -> str:
    """Render an element's own content followed by all of its descendants.

    The element's own title is left to the caller's heading, and a
    subsection contributes no own content because it equals its title.
    Blocks are separated by one blank line.

    Args:
        element: Subtree root.
        all_elements: Every element of the law.
        max_depth: Depth limit used to resolve parent chains.

    Returns:
        Stripped text of the whole subtree.
    """
    text = ""
    own_content = element.get("content") or ""
    if own_content and element.get("element_type") != ElementType.SUBSECTION.value:
        text += f"{own_content}\n"

    for index, descendant in enumerate(ordered_descendants(element, all_elements, max_depth)):
        if index > 0 or text:
            text += "\n"
        for line in _descendant_lines(descendant):
            text += f"{line}\n"
    return text.strip()


def truncate_content(
    text: str, max_chars: int = DEFAULT_DISPLAY_MAX_CHARS, ellipsis: str = DEFAULT_ELLIPSIS
) -> DisplayContent:
    """Cap text for display.

    Args:
        text: Full text.
        max_chars: Maximum characters kept before the ellipsis.
        ellipsis: Marker appended when text is cut.

    Returns:
        `DisplayContent` with the capped text and the original length.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")
    if len(text) <= max_chars:
        return DisplayContent(content=text, truncated=False, total_length=len(text))
    return DisplayContent(content=text[:max_chars] + ellipsis, truncated=True, total_length=len(text))


def flatten_full(
    element: LawElement, all_elements: Sequence[LawElement], max_depth: int = DEFAULT_MAX_DEPTH
) -> str:
    """Return the uncapped subtree text handed to text generators."""

    return render_hierarchical_content(element, all_elements, max_depth)


def flatten_display(
    element: LawElement,
    all_elements: Sequence[LawElement],
    max_chars: int = DEFAULT_DISPLAY_MAX_CHARS,
    ellipsis: str = DEFAULT_ELLIPSIS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> DisplayContent:
    """Return the subtree text capped for a display pane."""

    return truncate_content(render_hierarchical_content(element, all_elements, max_depth), max_chars, ellipsis)


def flatten_element(
    element: LawElement,
    all_elements: Sequence[LawElement],
    mode: FlattenMode | str = FlattenMode.FULL,
    max_chars: int = DEFAULT_DISPLAY_MAX_CHARS,
    ellipsis: str = DEFAULT_ELLIPSIS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str | DisplayContent:
    """Flatten a subtree in the requested mode.

    Args:
        element: Subtree root.
        all_elements: Every element of the law.
        mode: ``display`` for a `DisplayContent`, ``full`` for a plain string.
        max_chars: Display cap.
        ellipsis: Display truncation marker.
        max_depth: Depth limit used to resolve parent chains.

    Returns:
        Plain text in full mode, `DisplayContent` in display mode.

    Raises:
        ValueError: If the mode is unknown.
    """
    resolved = FlattenMode(getattr(mode, "value", mode))
    if resolved is FlattenMode.DISPLAY:
        return flatten_display(element, all_elements, max_chars=max_chars, ellipsis=ellipsis, max_depth=max_depth)
    return flatten_full(element, all_elements, max_depth)


__all__ = [
    "DEFAULT_DISPLAY_MAX_CHARS",
    "DEFAULT_ELLIPSIS",
    "FlattenMode",
    "DisplayContent",
    "ordered_descendants",
    "render_hierarchical_content",
    "truncate_content",
    "flatten_full",
    "flatten_display",
    "flatten_element",
]
