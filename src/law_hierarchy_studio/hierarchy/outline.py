"""Export law forests to Markdown outlines for inspection."""
from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Sequence

from law_hierarchy_studio.data.law_elements import (
    LawElementTree,
    display_subtitle,
    display_title,
    is_numbered,
    type_label,
)
from law_hierarchy_studio.hierarchy.selection import CascadingSelection, CheckState

_MARKERS = {
    CheckState.CHECKED: "[x]",
    CheckState.UNCHECKED: "[ ]",
    CheckState.INDETERMINATE: "[-]",
}


def render_outline(
    forest: Sequence[LawElementTree],
    selected: AbstractSet[str] | None = None,
    rules: CascadingSelection | None = None,
) -> str:
    """Render a forest as a nested Markdown list.

    Args:
        forest: Root tree nodes.
        selected: Current selection; when given, selectable nodes get a
            checkbox marker.
        rules: Selection rules, defaults to `CascadingSelection()`.

    Returns:
        Markdown text, one line per node plus optional preview lines.
    """
    rules = rules or CascadingSelection()
    lines: list[str] = []

    def _walk(node: LawElementTree, depth: int) -> None:
        indent = "  " * depth
        marker = ""
        if selected is not None and rules.is_selectable(node):
            marker = f"{_MARKERS[rules.check_state(node, selected)]} "
        label = ""
        if not is_numbered(node) and node["element_type"] != "subsection":
            label = f"{type_label(node['element_type'])} {node.get('element_number') or ''}".rstrip() + ": "
        lines.append(f"{indent}- {marker}{label}{display_title(node)}")
        subtitle = display_subtitle(node)
        if subtitle:
            lines.append(f"{indent}  > {subtitle}")
        for child in node.get("children", []):
            _walk(child, depth + 1)

    for root in forest:
        _walk(root, 0)
    return "\n".join(lines)


def export_outline(
    forest: Sequence[LawElementTree],
    output_path: Path,
    selected: AbstractSet[str] | None = None,
    rules: CascadingSelection | None = None,
) -> None:
    """Write the Markdown outline of a forest to a file.

    Args:
        forest: Root tree nodes.
        output_path: Destination Markdown file path.
        selected: Optional selection for checkbox markers.
        rules: Optional selection rules.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_outline(forest, selected, rules) + "\n", encoding="utf-8")


__all__ = ["render_outline", "export_outline"]
