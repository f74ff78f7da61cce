"""Cascading tri-state selection over a law forest.

The selection itself is a plain ``frozenset`` of element ids owned by the
caller: every operation takes the current set and returns a new one, so one
`CascadingSelection` can serve any number of open documents.
"""
from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Iterable

from law_hierarchy_studio.data.law_elements import ElementType, LawElementTree

DEFAULT_SELECTABLE_TYPES: frozenset[str] = frozenset(
    {ElementType.TITLE.value, ElementType.CHAPTER.value, ElementType.SUBSECTION.value}
)


class CheckState(str, Enum):
    """Rendered state of a checkbox."""

    CHECKED = "checked"
    UNCHECKED = "unchecked"
    INDETERMINATE = "indeterminate"


def descendant_ids(node: LawElementTree) -> list[str]:
    """Collect the ids of every descendant of ``node`` in pre-order.

    Args:
        node: Tree node.

    Returns:
        Descendant ids, whatever their kind.
    """
    ids: list[str] = []

    def _walk(current: LawElementTree) -> None:
        for child in current.get("children", []):
            ids.append(child["id"])
            _walk(child)

    _walk(node)
    return ids


class CascadingSelection:
    """Selection rules for a fixed set of directly selectable kinds."""

    def __init__(self, selectable_types: Iterable[str] = DEFAULT_SELECTABLE_TYPES) -> None:
        """Initialize selection rules.

        Args:
            selectable_types: Kinds a user may toggle directly.
        """
        self.selectable_types = frozenset(getattr(t, "value", t) for t in selectable_types)

    def is_selectable(self, node: LawElementTree) -> bool:
        """Return True when the node's kind can be toggled directly."""

        return node["element_type"] in self.selectable_types

    def toggle(
        self, node: LawElementTree, checked: bool, selected: AbstractSet[str]
    ) -> frozenset[str]:
        """Check or uncheck a node together with its whole subtree.

        The latest cascade wins: checking re-adds every descendant even if
        some were removed earlier, unchecking removes every descendant even
        if some were added by another node's cascade.

        Args:
            node: Tree node being toggled.
            checked: Target state.
            selected: Current selection.

        Returns:
            The new selection; unchanged when the node is not selectable.
        """
        if not self.is_selectable(node):
            return frozenset(selected)
        affected = {node["id"], *descendant_ids(node)}
        if checked:
            return frozenset(selected) | affected
        return frozenset(selected) - affected

    def is_checked(self, node: LawElementTree, selected: AbstractSet[str]) -> bool:
        """Return True when the node itself is in the selection."""

        return node["id"] in selected

    def is_fully_checked(self, node: LawElementTree, selected: AbstractSet[str]) -> bool:
        """Return True when every selectable frontier below the node is checked.

        Selectable children must be checked; non-selectable children are
        checked through their own children. A leaf is never fully checked.
        """
        children = node.get("children", [])
        if not children:
            return False
        for child in children:
            if self.is_selectable(child):
                if child["id"] not in selected:
                    return False
            elif not self.is_fully_checked(child, selected):
                return False
        return True

    def has_checked_descendant(self, node: LawElementTree, selected: AbstractSet[str]) -> bool:
        """Return True when some selectable frontier node below ``node`` is checked."""

        for child in node.get("children", []):
            if self.is_selectable(child):
                if child["id"] in selected:
                    return True
            elif self.has_checked_descendant(child, selected):
                return True
        return False

    def is_indeterminate(self, node: LawElementTree, selected: AbstractSet[str]) -> bool:
        """Return True for a partially selected, unchecked node."""

        if self.is_checked(node, selected):
            return False
        return self.has_checked_descendant(node, selected) and not self.is_fully_checked(node, selected)

    def check_state(self, node: LawElementTree, selected: AbstractSet[str]) -> CheckState:
        """Derive the rendered checkbox state of a node."""

        if self.is_checked(node, selected):
            return CheckState.CHECKED
        if self.is_indeterminate(node, selected):
            return CheckState.INDETERMINATE
        return CheckState.UNCHECKED


__all__ = ["DEFAULT_SELECTABLE_TYPES", "CheckState", "CascadingSelection", "descendant_ids"]
