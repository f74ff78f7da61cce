"""Law element records and loaders for Law Hierarchy Studio."""

from law_hierarchy_studio.data.element_loader import load_law_elements
from law_hierarchy_studio.data.law_elements import (
    ElementType,
    LawElement,
    LawElementTree,
    display_subtitle,
    display_title,
    type_label,
)

__all__ = [
    "load_law_elements",
    "ElementType",
    "LawElement",
    "LawElementTree",
    "display_subtitle",
    "display_title",
    "type_label",
]
