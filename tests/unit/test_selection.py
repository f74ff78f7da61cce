"""Tests for cascading tri-state selection."""
from __future__ import annotations

from typing import Any

from law_hierarchy_studio.data.law_elements import ElementType
from law_hierarchy_studio.hierarchy.builder import build_hierarchy, iter_tree
from law_hierarchy_studio.hierarchy.selection import CascadingSelection, CheckState, descendant_ids


def _element(element_id: str, element_type: str, parent_id: str | None = None, order: int = 1) -> dict[str, Any]:
    return {
        "id": element_id,
        "law_id": "law",
        "element_type": element_type,
        "element_number": "",
        "title": element_id,
        "content": "",
        "parent_id": parent_id,
        "order_position": order,
    }


def _nodes(elements) -> dict[str, Any]:
    """Build a forest and index its nodes by id."""

    return {node["id"]: node for node in iter_tree(build_hierarchy(elements))}


def _title_chapter_article() -> dict[str, Any]:
    return _nodes([_element("T", "title"), _element("C", "chapter", "T"), _element("X", "article", "C")])


def test_checking_a_node_selects_its_whole_subtree() -> None:
    """Checking cascades down to every descendant, selectable or not."""

    nodes = _title_chapter_article()
    rules = CascadingSelection()

    selected = rules.toggle(nodes["T"], True, frozenset())
    assert selected == {"T", "C", "X"}

    assert rules.toggle(nodes["T"], False, selected) == frozenset()


def test_non_selectable_node_is_a_no_op() -> None:
    """Toggling an article should return the selection unchanged."""

    nodes = _title_chapter_article()
    rules = CascadingSelection()

    assert rules.toggle(nodes["X"], True, frozenset({"other"})) == {"other"}


def test_toggle_returns_new_selection() -> None:
    """The caller's set must not be changed in place."""

    nodes = _title_chapter_article()
    current = frozenset({"other"})

    result = CascadingSelection().toggle(nodes["C"], True, current)

    assert current == {"other"}
    assert result == {"other", "C", "X"}


def test_latest_cascade_wins() -> None:
    """Each toggle overwrites the states of the whole toggled subtree."""

    nodes = _title_chapter_article()
    rules = CascadingSelection()
    empty: frozenset[str] = frozenset()

    after_child_then_parent_off = rules.toggle(nodes["T"], False, rules.toggle(nodes["C"], True, empty))
    assert after_child_then_parent_off == frozenset()

    parent_on_child_off = rules.toggle(nodes["C"], False, rules.toggle(nodes["T"], True, empty))
    assert parent_on_child_off == {"T"}
    assert rules.check_state(nodes["T"], parent_on_child_off) is CheckState.CHECKED

    child_off_then_parent_on = rules.toggle(nodes["T"], True, rules.toggle(nodes["C"], False, empty))
    assert child_off_then_parent_on == {"T", "C", "X"}

    reasserted = rules.toggle(nodes["T"], True, parent_on_child_off)
    assert reasserted == {"T", "C", "X"}


def test_partial_selection_is_indeterminate() -> None:
    """A title with one of two chapters checked is indeterminate until both are."""

    nodes = _nodes([_element("T", "title"), _element("C1", "chapter", "T", 1), _element("C2", "chapter", "T", 2)])
    rules = CascadingSelection()

    selected = rules.toggle(nodes["C1"], True, frozenset())
    assert not rules.is_checked(nodes["T"], selected)
    assert rules.is_indeterminate(nodes["T"], selected)
    assert rules.check_state(nodes["T"], selected) is CheckState.INDETERMINATE

    selected = rules.toggle(nodes["C2"], True, selected)
    assert rules.is_fully_checked(nodes["T"], selected)
    assert not rules.is_indeterminate(nodes["T"], selected)
    assert rules.check_state(nodes["T"], selected) is CheckState.UNCHECKED


def test_state_looks_through_non_selectable_levels() -> None:
    """A section between a title and its subsections is transparent to the state."""

    nodes = _nodes(
        [
            _element("T", "title"),
            _element("S", "section", "T"),
            _element("U1", "subsection", "S", 1),
            _element("U2", "subsection", "S", 2),
        ]
    )
    rules = CascadingSelection()

    selected = rules.toggle(nodes["U1"], True, frozenset())
    assert rules.has_checked_descendant(nodes["T"], selected)
    assert rules.is_indeterminate(nodes["T"], selected)

    selected = rules.toggle(nodes["U2"], True, selected)
    assert rules.is_fully_checked(nodes["T"], selected)


def test_leaf_is_never_fully_checked() -> None:
    """A node without children cannot be fully checked."""

    nodes = _nodes([_element("C", "chapter")])
    rules = CascadingSelection()
    selected = rules.toggle(nodes["C"], True, frozenset())

    assert not rules.is_fully_checked(nodes["C"], selected)
    assert rules.check_state(nodes["C"], selected) is CheckState.CHECKED


def test_selectable_types_are_configurable() -> None:
    """Rules accept enum members as well as plain kind names."""

    nodes = _title_chapter_article()
    rules = CascadingSelection([ElementType.ARTICLE])

    assert rules.is_selectable(nodes["X"])
    assert not rules.is_selectable(nodes["T"])
    assert rules.toggle(nodes["T"], True, frozenset()) == frozenset()


def test_descendant_ids_are_pre_order() -> None:
    """Descendants are listed parents first, siblings by position."""

    nodes = _nodes(
        [
            _element("R", "title"),
            _element("B", "chapter", "R", 2),
            _element("A", "chapter", "R", 1),
            _element("A1", "article", "A", 1),
        ]
    )

    assert descendant_ids(nodes["R"]) == ["A", "A1", "B"]
