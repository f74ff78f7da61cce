"""Copy whole subtrees into an independent element list, and prune them again."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from law_hierarchy_studio.data.law_elements import LawElement, ensure_element_list, unique_by_id
from law_hierarchy_studio.hierarchy.builder import DEFAULT_MAX_DEPTH, resolve_parents

logger = logging.getLogger(__name__)


@dataclass
class SubtreeRemoval:
    """Outcome of removing a subtree from a copied element list."""

    kept: list[LawElement] = field(default_factory=list)
    removed_ids: list[str] = field(default_factory=list)


def _children_index(elements: Sequence[LawElement], max_depth: int) -> dict[str, list[str]]:
    """Map every parent id to its child ids over the resolved edges, in input order."""

    parents = resolve_parents(elements, max_depth=max_depth)
    children: dict[str, list[str]] = {}
    for element in elements:
        parent_id = parents[element["id"]]
        if parent_id is not None:
            children.setdefault(parent_id, []).append(element["id"])
    return children


def _subtree_ids(root_id: str, children: dict[str, list[str]]) -> list[str]:
    """Return ``root_id`` followed by its descendants in pre-order."""

    ids: list[str] = []
    stack = [root_id]
    while stack:
        current = stack.pop()
        ids.append(current)
        stack.extend(reversed(children.get(current, [])))
    return ids


def extract_subtrees(
    all_elements: Sequence[LawElement],
    root_ids: Iterable[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[LawElement]:
    """Materialize the selected nodes and all of their descendants.

    Roots are visited in iteration order; for each, the root record comes
    first and its descendants follow in input order. Records are returned
    as-is (ids are not rewritten), de-duplicated by id.

    Args:
        all_elements: Every element of the source law.
        root_ids: Ids of the subtree roots to copy.
        max_depth: Depth limit used to resolve parent chains, as for the tree.

    Returns:
        Flat element list ready to be rebuilt with `build_hierarchy`.
    """
    unique = unique_by_id(ensure_element_list(all_elements, "all_elements"))
    by_id = {element["id"]: element for element in unique}
    children = _children_index(unique, max_depth)

    extracted: list[LawElement] = []
    seen: set[str] = set()
    for root_id in root_ids:
        root = by_id.get(root_id)
        if root is None:
            logger.debug("Subtree root %s not found; skipping", root_id)
            continue
        descendants = set(_subtree_ids(root_id, children)[1:])
        batch = [root] + [element for element in unique if element["id"] in descendants]
        for element in batch:
            if element["id"] not in seen:
                seen.add(element["id"])
                extracted.append(element)
    return extracted


def remove_subtree(
    materialized: Sequence[LawElement], root_id: str, max_depth: int = DEFAULT_MAX_DEPTH
) -> SubtreeRemoval:
    """Remove a node and its descendants from a copied element list.

    Descendants are looked up within ``materialized`` only. Removing an id
    that is not present reports it as removed and keeps the list unchanged,
    since the caller only needs the id to be absent.

    Args:
        materialized: Element list produced by `extract_subtrees`.
        root_id: Id of the subtree root to remove.
        max_depth: Depth limit used to resolve parent chains, as for the tree.

    Returns:
        The kept elements and the removed ids (root first, then descendants).
    """
    elements = ensure_element_list(materialized, "materialized")
    unique = unique_by_id(elements)
    if all(element["id"] != root_id for element in unique):
        logger.debug("Element %s is not in the copied list; nothing to remove", root_id)

    removed_ids = _subtree_ids(root_id, _children_index(unique, max_depth))
    removed = set(removed_ids)
    kept = [element for element in elements if element["id"] not in removed]
    return SubtreeRemoval(kept=kept, removed_ids=removed_ids)


__all__ = ["SubtreeRemoval", "extract_subtrees", "remove_subtree"]
