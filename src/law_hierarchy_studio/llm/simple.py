"""Lightweight local generator for offline use."""
from __future__ import annotations

from law_hierarchy_studio.llm.base import ChatMessage, GenerationResponse, TextGenerator


class SimpleLocalClient(TextGenerator):
    """Echo-style generator that never leaves the process."""

    def generate(self, messages: list[ChatMessage]) -> GenerationResponse:
        """Return the last user message with a marker.

        Args:
            messages: Chat messages.

        Returns:
            Echoed text.
        """
        user_text = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")
        return {"text": f"[Local mock answer]\n{user_text[:400]}", "usage": None}


__all__ = ["SimpleLocalClient"]
