"""End-to-end workflow over the bundled sample law."""
from __future__ import annotations

from pathlib import Path

from law_hierarchy_studio.config.loader import load_config
from law_hierarchy_studio.data.element_loader import load_law_elements
from law_hierarchy_studio.hierarchy import (
    SelectionSession,
    build_hierarchy,
    flatten_display,
    flatten_full,
    iter_tree,
)
from law_hierarchy_studio.llm import SimpleLocalClient, StudyAssistant

CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "default.yaml"


def test_select_copy_prune_and_study() -> None:
    """Open the default law, copy a selection, prune it and study the rest."""

    cfg = load_config(CONFIG_PATH)
    elements = load_law_elements(cfg.data.elements_path, law_id=cfg.data.default_law_id)
    assert len(elements) == 12

    session = SelectionSession(law_id="cp", elements=elements)
    session.toggle("t1", True)
    session.toggle("c2", False)
    assert session.selected == {"t1", "c1", "s1", "a1", "p1", "s2", "a2", "k0", "k1"}

    copied = session.copy_selection()
    assert [e["id"] for e in copied][:2] == ["t1", "a2"]
    assert {e["id"] for e in copied} == {"t1", "a2", "c2", "k1", "c1", "s1", "k0", "a1", "p1", "s2", "a13"}

    session.remove_copied("c2")
    forest = session.copied_hierarchy()
    assert [node["id"] for node in iter_tree(forest)] == ["t1", "c1", "s1", "a1", "p1", "s2", "a2", "k0", "k1"]

    s2 = next(e for e in elements if e["id"] == "s2")
    assert flatten_full(s2, session.copied) == (
        "Art. 2\n"
        "No one may be punished for an act that a later law no longer considers a crime.\n\n"
        "I\nthe conviction ceases to have effect;\n\n"
        "II\nthe later law applies to earlier facts when it favours the agent;"
    )
    shown = flatten_display(s2, elements, max_chars=cfg.flatten.display_max_chars)
    assert shown["truncated"] is False

    answer = StudyAssistant(SimpleLocalClient()).run("questions", s2, elements, question_type="essay")
    assert answer["text"].startswith("[Local mock answer]")


def test_orphan_is_kept_as_root() -> None:
    """An element whose parent is missing from the export is still shown."""

    cfg = load_config(CONFIG_PATH)
    elements = load_law_elements(cfg.data.elements_path, law_id="cp")

    roots = build_hierarchy(elements)

    assert [root["id"] for root in roots] == ["t1", "a99"]
