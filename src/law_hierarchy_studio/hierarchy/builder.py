"""Forest reconstruction from flat, parent-pointer encoded law elements."""
from __future__ import annotations

import logging
from typing import Sequence

from law_hierarchy_studio.data.law_elements import (
    LawElement,
    LawElementTree,
    ensure_element_list,
    order_key,
    unique_by_id,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

# (element id, problem) pairs already reported at warning level.
_REPORTED: set[tuple[str, str]] = set()


def _report(element_id: str, problem: str, message: str, *args: object) -> None:
    """Log a structural problem as a warning the first time, then at debug level."""

    key = (element_id, problem)
    if key in _REPORTED:
        logger.debug(message, *args)
        return
    _REPORTED.add(key)
    logger.warning(message, *args)


def resolve_parents(
    elements: Sequence[LawElement], max_depth: int = DEFAULT_MAX_DEPTH
) -> dict[str, str | None]:
    """Compute the effective parent of every element.

    A parent that does not exist makes the element a root. Parent chains are
    walked iteratively with a visited set: an element whose chain loops back
    on itself, or runs deeper than ``max_depth``, is promoted to a root so
    every later recursive walk terminates.

    Args:
        elements: Law elements, first occurrence of each id wins.
        max_depth: Longest ancestor chain accepted before cutting.

    Returns:
        Mapping of element id to effective parent id (None for roots).
    """
    unique = unique_by_id(ensure_element_list(elements))
    parents: dict[str, str | None] = {}
    for element in unique:
        parent_id = element.get("parent_id")
        parents[element["id"]] = parent_id if parent_id else None

    for element_id, parent_id in parents.items():
        if parent_id is not None and parent_id not in parents:
            logger.debug("Element %s points to missing parent %s; treating as root", element_id, parent_id)
            parents[element_id] = None

    # Depth of every element whose chain is known to end at a root.
    depths: dict[str, int] = {}
    for element in unique:
        chain, anchor = _walk_to_known(element["id"], parents, depths)
        depth = depths[anchor] if anchor is not None else -1
        for node_id in reversed(chain):
            depth += 1
            if depth > max_depth:
                _report(
                    node_id, "depth", "Element %s exceeds max depth %d; promoting it to root", node_id, max_depth
                )
                parents[node_id] = None
                depth = 0
            depths[node_id] = depth
    return parents


def _walk_to_known(
    start: str, parents: dict[str, str | None], depths: dict[str, int]
) -> tuple[list[str], str | None]:
    """Walk up from ``start`` until a root or an already measured element.

    A chain that revisits one of its own elements is cut there: that element
    becomes a root and the walk starts over.

    Returns:
        The unmeasured chain (child first) and the measured element it ends
        on, or None when it ends past a root.
    """
    while True:
        chain: list[str] = []
        on_chain: set[str] = set()
        current: str | None = start
        while current is not None and current not in depths:
            if current in on_chain:
                _report(current, "cycle", "Parent cycle detected at element %s; promoting it to root", current)
                parents[current] = None
                break
            chain.append(current)
            on_chain.add(current)
            current = parents[current]
        else:
            return chain, current


def build_hierarchy(
    elements: Sequence[LawElement], max_depth: int = DEFAULT_MAX_DEPTH
) -> list[LawElementTree]:
    """Build an ordered forest from flat law elements.

    Args:
        elements: Law elements in any order; the records are not modified.
        max_depth: Longest ancestor chain accepted before cutting.

    Returns:
        Root tree nodes with children sorted by ``order_position``.
    """
    unique = unique_by_id(ensure_element_list(elements))
    parents = resolve_parents(unique, max_depth=max_depth)

    nodes: dict[str, LawElementTree] = {}
    for element in unique:
        node: LawElementTree = {**element, "children": []}  # type: ignore[typeddict-item]
        nodes[element["id"]] = node

    roots: list[LawElementTree] = []
    for element in unique:
        node = nodes[element["id"]]
        parent_id = parents[element["id"]]
        if parent_id is None:
            roots.append(node)
        else:
            nodes[parent_id]["children"].append(node)

    _sort_forest(roots)
    return roots


def _sort_forest(roots: list[LawElementTree]) -> None:
    """Sort sibling lists in place; ``sort`` is stable so input order breaks ties."""

    roots.sort(key=order_key)
    stack = list(roots)
    while stack:
        node = stack.pop()
        children = node["children"]
        children.sort(key=order_key)
        stack.extend(children)


def iter_tree(roots: Sequence[LawElementTree]) -> list[LawElementTree]:
    """Flatten a forest into a list in pre-order.

    Args:
        roots: Root tree nodes.

    Returns:
        Every tree node, parents before their children.
    """
    nodes: list[LawElementTree] = []
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        nodes.append(node)
        stack.extend(reversed(node.get("children", [])))
    return nodes


__all__ = ["DEFAULT_MAX_DEPTH", "resolve_parents", "build_hierarchy", "iter_tree"]
