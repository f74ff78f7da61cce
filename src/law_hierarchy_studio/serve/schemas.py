"""API schemas for serve mode."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Schema for health check."""

    status: str
    model: str
    elements: int


class OpenSessionRequest(BaseModel):
    """Schema for opening a law in a new selection session."""

    law_id: str | None = None


class OpenSessionResponse(BaseModel):
    """Schema for a newly opened session."""

    session_id: str
    law_id: str
    elements: int


class TreeNodeResponse(BaseModel):
    """One rendered tree node."""

    id: str
    element_type: str
    element_number: str
    title: str
    display_title: str
    subtitle: str | None = None
    selectable: bool = False
    state: Literal["checked", "unchecked", "indeterminate"] | None = None
    children: list["TreeNodeResponse"] = Field(default_factory=list)


TreeNodeResponse.model_rebuild()


class TreeResponse(BaseModel):
    """Schema for a rendered forest."""

    law_id: str
    roots: list[TreeNodeResponse]


class ToggleRequest(BaseModel):
    """Schema for a checkbox toggle."""

    element_id: str
    checked: bool


class SelectionResponse(BaseModel):
    """Schema for the current selection."""

    session_id: str
    selected_ids: list[str]


class CopyResponse(BaseModel):
    """Schema for the copied structure of a session."""

    session_id: str
    elements: list[dict[str, Any]]
    roots: list[TreeNodeResponse]


class RemoveRequest(BaseModel):
    """Schema for removing a subtree from the copied structure."""

    element_id: str


class RemoveResponse(BaseModel):
    """Schema for a subtree removal."""

    session_id: str
    removed_ids: list[str]
    kept: list[dict[str, Any]]


class ContentResponse(BaseModel):
    """Schema for flattened element content."""

    element_id: str
    title: str
    mode: Literal["display", "full"]
    content: str
    truncated: bool
    total_length: int


class AskRequest(BaseModel):
    """Schema for running a study tool."""

    tool: Literal["explain", "examples", "questions", "custom"]
    question: str | None = None
    question_type: str | None = None


class AskResponse(BaseModel):
    """Schema for a study tool reply."""

    element_id: str
    tool: str
    answer: str
    usage: dict[str, Any] | None = None


__all__ = [
    "HealthResponse",
    "OpenSessionRequest",
    "OpenSessionResponse",
    "TreeNodeResponse",
    "TreeResponse",
    "ToggleRequest",
    "SelectionResponse",
    "CopyResponse",
    "RemoveRequest",
    "RemoveResponse",
    "ContentResponse",
    "AskRequest",
    "AskResponse",
]
