"""Chat completions client for OpenAI-compatible endpoints."""
from __future__ import annotations

import logging
import os

from law_hierarchy_studio.clients.openai_client import create_openai_client
from law_hierarchy_studio.llm.base import ChatMessage, GenerationResponse, TextGenerator

logger = logging.getLogger(__name__)


class OpenAIChatClient(TextGenerator):
    """Generator backed by the chat completions API (OpenAI, DeepSeek, ...)."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str,
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ) -> None:
        """Initialize client.

        Args:
            base_url: API base URL.
            model: Model name.
            api_key: API key value.
            max_tokens: Completion token budget.
            temperature: Sampling temperature.
        """
        self.base_url = base_url
        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.temperature = temperature

    def generate(self, messages: list[ChatMessage]) -> GenerationResponse:
        """Send the conversation and return the first choice.

        Args:
            messages: Chat messages.

        Returns:
            Reply text and usage.

        Raises:
            RuntimeError: If no API key is configured or the reply is empty.
        """
        api_key = self.api_key or os.getenv("OPENAI_API_KEY", "")
        if not api_key:
            raise RuntimeError("API key is not set; cannot call the text generation endpoint.")

        client = create_openai_client(api_key=api_key, base_url=self.base_url)
        resp = client.chat.completions.create(
            model=self.model,
            messages=messages,  # type: ignore[arg-type]
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            stream=False,
        )
        if not resp.choices:
            raise RuntimeError("Text generation endpoint returned no choices.")
        text = resp.choices[0].message.content or ""
        usage_dict = None
        usage_obj = getattr(resp, "usage", None)
        if usage_obj:
            usage_dict = getattr(usage_obj, "model_dump", lambda: usage_obj)()
        logger.debug("Generated %d chars with model=%s", len(text), self.model)
        return {"text": text, "usage": usage_dict}


__all__ = ["OpenAIChatClient"]
