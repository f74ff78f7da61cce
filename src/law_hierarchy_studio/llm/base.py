"""Text generator interfaces."""
from __future__ import annotations

from typing import Any, Protocol, TypedDict


class ChatMessage(TypedDict):
    """One chat message sent to a generator."""

    role: str
    content: str


class GenerationResponse(TypedDict, total=False):
    """Generated text with diagnostics."""

    text: str
    usage: dict[str, Any] | None


class TextGenerator(Protocol):
    """Protocol for text generation collaborators."""

    def generate(self, messages: list[ChatMessage]) -> GenerationResponse:
        """Generate a reply to a chat conversation.

        Args:
            messages: System and user messages, in order.

        Returns:
            GenerationResponse containing the reply text and optional usage info.
        """
        ...


__all__ = ["ChatMessage", "GenerationResponse", "TextGenerator"]
