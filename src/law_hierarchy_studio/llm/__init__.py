"""Text generator exports."""
from __future__ import annotations

import logging
import os

from law_hierarchy_studio.config.constants import LLMProvider
from law_hierarchy_studio.config.schema import LlmConfig
from law_hierarchy_studio.llm.base import ChatMessage, GenerationResponse, TextGenerator
from law_hierarchy_studio.llm.openai_chat import OpenAIChatClient
from law_hierarchy_studio.llm.simple import SimpleLocalClient
from law_hierarchy_studio.llm.study_tools import StudyAssistant, build_messages, clean_generated_text


def build_generator(cfg: LlmConfig) -> TextGenerator:
    """Instantiate the configured text generator.

    Args:
        cfg: Text generation configuration.

    Returns:
        Configured generator.
    """
    if cfg.provider is LLMProvider.OPENAI:
        logging.getLogger(__name__).info(
            "Generator setup provider=openai model=%s base_url=%s", cfg.model, cfg.openai.base_url
        )
        return OpenAIChatClient(
            base_url=cfg.openai.base_url,
            model=cfg.model,
            api_key=os.getenv(cfg.openai.api_key_env, ""),
            max_tokens=cfg.max_tokens,
            temperature=cfg.temperature,
        )
    logging.getLogger(__name__).info("Generator setup provider=local (simple echo)")
    return SimpleLocalClient()


__all__ = [
    "ChatMessage",
    "GenerationResponse",
    "TextGenerator",
    "OpenAIChatClient",
    "SimpleLocalClient",
    "StudyAssistant",
    "build_messages",
    "clean_generated_text",
    "build_generator",
]
