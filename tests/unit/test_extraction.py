"""Tests for subtree extraction and removal."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from law_hierarchy_studio.hierarchy.builder import build_hierarchy
from law_hierarchy_studio.hierarchy.extraction import extract_subtrees, remove_subtree
from law_hierarchy_studio.hierarchy.session import SelectionSession

FIXTURE_JSON = Path(__file__).resolve().parents[1] / "fixtures" / "sample_law.json"


def _sample_law() -> list[dict[str, Any]]:
    data = json.loads(FIXTURE_JSON.read_text(encoding="utf-8"))
    return [e for e in data["elements"] if e["law_id"] == "cp"]


def _ids(elements) -> list[str]:
    return [element["id"] for element in elements]


def test_extract_puts_root_first_then_descendants_in_input_order() -> None:
    """The root comes first and its descendants follow as they appear in the input."""

    copied = extract_subtrees(_sample_law(), ["c1"])

    assert _ids(copied) == ["c1", "a2", "k1", "s1", "k0", "a1", "p1", "s2"]


def test_overlapping_roots_are_deduplicated() -> None:
    """A root nested under another root should not be copied twice."""

    copied = extract_subtrees(_sample_law(), ["t1", "c1"])

    assert _ids(copied) == ["t1", "a2", "c2", "k1", "c1", "s1", "k0", "a1", "p1", "s2", "a13"]


def test_extract_with_no_roots_is_empty() -> None:
    """Empty root list and unknown roots both copy nothing."""

    assert extract_subtrees(_sample_law(), []) == []
    assert extract_subtrees(_sample_law(), ["nope"]) == []


def test_extracted_records_keep_their_ids() -> None:
    """Copied records are the source records, unchanged."""

    elements = _sample_law()
    by_id = {e["id"]: e for e in elements}

    for record in extract_subtrees(elements, ["s2"]):
        assert record == by_id[record["id"]]


def test_copied_structure_rebuilds_into_its_own_forest() -> None:
    """A copied subtree whose parent was left behind becomes a root."""

    roots = build_hierarchy(extract_subtrees(_sample_law(), ["s2"]))

    assert _ids(roots) == ["s2"]
    article = roots[0]["children"][0]
    assert article["id"] == "a2"
    assert _ids(article["children"]) == ["k0", "k1"]


def test_remove_subtree_drops_root_and_descendants() -> None:
    """Removal reports the root first and keeps the rest in order."""

    materialized = extract_subtrees(_sample_law(), ["t1"])

    removal = remove_subtree(materialized, "c1")

    assert removal.removed_ids[0] == "c1"
    assert set(removal.removed_ids) == {"c1", "s1", "a1", "p1", "s2", "a2", "k0", "k1"}
    assert _ids(removal.kept) == ["t1", "c2", "a13"]


def test_removal_inverts_extraction() -> None:
    """Removing a root takes away exactly what extracting that root added."""

    elements = _sample_law()
    roots = ["c1", "c2"]
    materialized = extract_subtrees(elements, roots)

    for root_id in roots:
        removal = remove_subtree(materialized, root_id)
        expected = set(_ids(extract_subtrees(elements, [root_id])))
        assert set(removal.removed_ids) == expected
        assert _ids(removal.kept) == [i for i in _ids(materialized) if i not in expected]


def test_removing_absent_root_keeps_everything() -> None:
    """An id that is not in the list is reported as removed and nothing else changes."""

    materialized = extract_subtrees(_sample_law(), ["c2"])

    removal = remove_subtree(materialized, "zzz")

    assert removal.removed_ids == ["zzz"]
    assert removal.kept == materialized


def test_non_list_collections_fail_fast() -> None:
    """Both operations reject collections that are not lists."""

    with pytest.raises(TypeError):
        extract_subtrees({"c1": {}}, ["c1"])  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        remove_subtree(None, "c1")  # type: ignore[arg-type]


def _chain() -> list[dict[str, Any]]:
    """Title T, chapter C, subsection S, article X, each nested in the previous one."""

    kinds = [("T", "title", None), ("C", "chapter", "T"), ("S", "subsection", "C"), ("X", "article", "S")]
    return [
        {
            "id": element_id,
            "law_id": "law",
            "element_type": kind,
            "element_number": "",
            "title": element_id,
            "content": "",
            "parent_id": parent_id,
            "order_position": 1,
        }
        for element_id, kind, parent_id in kinds
    ]


def test_extraction_honours_depth_limit() -> None:
    """An element cut to a root by the depth limit is not a descendant any more."""

    elements = _chain()

    assert _ids(extract_subtrees(elements, ["T"], max_depth=1)) == ["T", "C"]
    assert _ids(extract_subtrees(elements, ["S"], max_depth=1)) == ["S", "X"]
    assert _ids(extract_subtrees(elements, ["T"])) == ["T", "C", "S", "X"]

    removal = remove_subtree(elements, "T", max_depth=1)
    assert removal.removed_ids == ["T", "C"]
    assert _ids(removal.kept) == ["S", "X"]


def test_session_copy_matches_depth_cut_selection() -> None:
    """Copying a selection yields exactly the elements the depth-cut tree selected."""

    session = SelectionSession(law_id="law", elements=_chain(), max_depth=1)

    selected = session.toggle("T", True)
    copied = session.copy_selection()

    assert selected == {"T", "C"}
    assert {e["id"] for e in copied} == set(selected)
    assert [root["id"] for root in session.copied_hierarchy()] == ["T"]

    removal = session.remove_copied("T")
    assert removal.removed_ids == ["T", "C"]
    assert session.copied == []
