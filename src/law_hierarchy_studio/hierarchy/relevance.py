"""Prune a law forest down to the nodes around a set of ids of interest."""
from __future__ import annotations

from typing import Iterable, Sequence

from law_hierarchy_studio.data.law_elements import LawElementTree


def filter_relevant(
    forest: Sequence[LawElementTree], interesting_ids: Iterable[str]
) -> list[LawElementTree]:
    """Keep interesting nodes together with their context.

    A node survives when its id is interesting, when one of its descendants
    is interesting (the node is kept as context), or when one of its
    ancestors is interesting (the whole subtree under an interesting node is
    kept). Sibling order is preserved and the input trees are not modified.

    Args:
        forest: Root tree nodes, as built by `build_hierarchy`.
        interesting_ids: Ids of the nodes of interest.

    Returns:
        A new, pruned forest.
    """
    interesting = set(interesting_ids)
    if not interesting:
        return []
    kept: list[LawElementTree] = []
    for root in forest:
        pruned = _prune(root, interesting)
        if pruned is not None:
            kept.append(pruned)
    return kept


def _prune(node: LawElementTree, interesting: set[str]) -> LawElementTree | None:
    """Return a pruned copy of ``node`` or None when nothing below it is relevant."""

    if node["id"] in interesting:
        return _copy_subtree(node)

    children: list[LawElementTree] = []
    for child in node.get("children", []):
        pruned = _prune(child, interesting)
        if pruned is not None:
            children.append(pruned)
    if not children:
        return None
    return {**node, "children": children}  # type: ignore[typeddict-item]


def _copy_subtree(node: LawElementTree) -> LawElementTree:
    """Copy a subtree so callers may edit the result freely."""

    return {  # type: ignore[typeddict-item]
        **node,
        "children": [_copy_subtree(child) for child in node.get("children", [])],
    }


__all__ = ["filter_relevant"]
