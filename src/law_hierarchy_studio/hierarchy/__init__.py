"""Hierarchical selection and content aggregation engine."""

from law_hierarchy_studio.hierarchy.builder import build_hierarchy, iter_tree, resolve_parents
from law_hierarchy_studio.hierarchy.extraction import SubtreeRemoval, extract_subtrees, remove_subtree
from law_hierarchy_studio.hierarchy.flatten import (
    DisplayContent,
    FlattenMode,
    flatten_display,
    flatten_element,
    flatten_full,
    render_hierarchical_content,
    truncate_content,
)
from law_hierarchy_studio.hierarchy.outline import export_outline, render_outline
from law_hierarchy_studio.hierarchy.relevance import filter_relevant
from law_hierarchy_studio.hierarchy.selection import (
    DEFAULT_SELECTABLE_TYPES,
    CascadingSelection,
    CheckState,
    descendant_ids,
)
from law_hierarchy_studio.hierarchy.session import SelectionSession

__all__ = [
    "build_hierarchy",
    "iter_tree",
    "resolve_parents",
    "filter_relevant",
    "DEFAULT_SELECTABLE_TYPES",
    "CascadingSelection",
    "CheckState",
    "descendant_ids",
    "SubtreeRemoval",
    "extract_subtrees",
    "remove_subtree",
    "DisplayContent",
    "FlattenMode",
    "flatten_display",
    "flatten_element",
    "flatten_full",
    "render_hierarchical_content",
    "truncate_content",
    "render_outline",
    "export_outline",
    "SelectionSession",
]
