"""Per-document selection state owned by the caller."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from law_hierarchy_studio.data.law_elements import LawElement, LawElementTree
from law_hierarchy_studio.hierarchy.builder import DEFAULT_MAX_DEPTH, build_hierarchy, iter_tree
from law_hierarchy_studio.hierarchy.extraction import SubtreeRemoval, extract_subtrees, remove_subtree
from law_hierarchy_studio.hierarchy.selection import CascadingSelection

logger = logging.getLogger(__name__)


@dataclass
class SelectionSession:
    """Selection and copied structure of one open law.

    The selection is replaced on every interaction, never mutated, so a
    snapshot taken by a caller stays valid.
    """

    law_id: str
    elements: list[LawElement]
    rules: CascadingSelection = field(default_factory=CascadingSelection)
    max_depth: int = DEFAULT_MAX_DEPTH
    selected: frozenset[str] = frozenset()
    copied: list[LawElement] = field(default_factory=list)

    def hierarchy(self) -> list[LawElementTree]:
        """Build the forest of the whole law."""

        return build_hierarchy(self.elements, max_depth=self.max_depth)

    def copied_hierarchy(self) -> list[LawElementTree]:
        """Build the forest of the copied elements."""

        return build_hierarchy(self.copied, max_depth=self.max_depth)

    def find_node(self, element_id: str) -> LawElementTree | None:
        """Return the tree node with the given id, if present."""

        for node in iter_tree(self.hierarchy()):
            if node["id"] == element_id:
                return node
        return None

    def toggle(self, element_id: str, checked: bool) -> frozenset[str]:
        """Toggle one element and store the resulting selection.

        Raises:
            KeyError: If the element is not part of the law.
        """
        node = self.find_node(element_id)
        if node is None:
            raise KeyError(element_id)
        self.selected = self.rules.toggle(node, checked, self.selected)
        logger.debug("Session %s: %d elements selected", self.law_id, len(self.selected))
        return self.selected

    def clear(self) -> None:
        """Forget the selection and the copied structure."""

        self.selected = frozenset()
        self.copied = []

    def copy_selection(self) -> list[LawElement]:
        """Copy the selected subtrees into the session's second container.

        Selected ids are visited in tree order so ancestors are copied before
        their descendants.
        """
        ordered_ids = [node["id"] for node in iter_tree(self.hierarchy()) if node["id"] in self.selected]
        self.copied = extract_subtrees(self.elements, ordered_ids, max_depth=self.max_depth)
        logger.info("Copied %d elements from law %s", len(self.copied), self.law_id)
        return self.copied

    def remove_copied(self, element_id: str) -> SubtreeRemoval:
        """Remove a subtree from the copied structure."""

        removal = remove_subtree(self.copied, element_id, max_depth=self.max_depth)
        self.copied = removal.kept
        return removal


__all__ = ["SelectionSession"]
