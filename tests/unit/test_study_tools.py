"""Tests for study tools and text generator wiring."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from law_hierarchy_studio.config.constants import StudyTool
from law_hierarchy_studio.config.schema import LlmConfig
from law_hierarchy_studio.llm import (
    OpenAIChatClient,
    SimpleLocalClient,
    StudyAssistant,
    build_generator,
    build_messages,
    clean_generated_text,
)
from law_hierarchy_studio.llm import openai_chat as openai_chat_mod


class _RecordingGenerator:
    """Generator stub that records the messages it receives."""

    def __init__(self, reply: str = "Answer.") -> None:
        self.reply = reply
        self.calls: list[list[dict[str, str]]] = []

    def generate(self, messages):
        self.calls.append(messages)
        return {"text": self.reply, "usage": {"total_tokens": 3}}


def _law(long_content: str) -> list[dict[str, Any]]:
    return [
        {
            "id": "a1",
            "law_id": "law",
            "element_type": "article",
            "element_number": "1",
            "title": "Art. 1",
            "content": "Head",
            "parent_id": None,
            "order_position": 1,
        },
        {
            "id": "p1",
            "law_id": "law",
            "element_type": "paragraph",
            "element_number": "1",
            "title": "§ 1",
            "content": long_content,
            "parent_id": "a1",
            "order_position": 1,
        },
    ]


def test_clean_generated_text_strips_greetings_and_sign_offs() -> None:
    """Stock intros, outros and extra blank lines are removed."""

    raw = "Sure! Explanation body.\n\n\n\nMore. Good luck on your exam!"

    assert clean_generated_text(raw) == "Explanation body.\n\nMore."


def test_assistant_sends_uncapped_text() -> None:
    """The generator receives the full subtree text, never the display cut."""

    long_content = "x" * 5000
    elements = _law(long_content)
    generator = _RecordingGenerator("Certainly! Here it is.")

    result = StudyAssistant(generator).run("explain", elements[0], elements)

    assert result == {"text": "Here it is.", "usage": {"total_tokens": 3}}
    user_message = generator.calls[0][1]["content"]
    assert "**Art. 1**" in user_message
    assert f"Head\n\n§ 1\n{long_content}" in user_message


def test_custom_tool_requires_question() -> None:
    """The custom tool cannot run without a question."""

    with pytest.raises(ValueError):
        build_messages(StudyTool.CUSTOM, "Art. 1", "text", question="  ")

    messages = build_messages(StudyTool.CUSTOM, "Art. 1", "text", question="What is it?")
    assert messages[1]["content"].endswith("Question: What is it?")


def test_question_types_change_instructions() -> None:
    """A known question type replaces the default mixed instructions."""

    true_false = build_messages(StudyTool.QUESTIONS, "Art. 1", "text", question_type="true_false")
    mixed = build_messages(StudyTool.QUESTIONS, "Art. 1", "text")

    assert "6 true or false statements" in true_false[1]["content"]
    assert "3 multiple choice questions" in mixed[1]["content"]
    assert true_false[0]["role"] == "system"


def test_build_generator_selects_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    """The local provider needs no key; the openai provider reads it from the environment."""

    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")

    assert isinstance(build_generator(LlmConfig(provider="local")), SimpleLocalClient)
    client = build_generator(LlmConfig(provider="openai"))
    assert isinstance(client, OpenAIChatClient)
    assert client.api_key == "sk-test"
    assert client.model == "deepseek-chat"


def test_openai_client_without_key_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    """Missing credentials are reported before any request is made."""

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    client = OpenAIChatClient(base_url="https://example.com/v1", model="m", api_key="")

    with pytest.raises(RuntimeError):
        client.generate([{"role": "user", "content": "hi"}])


def test_openai_client_returns_first_choice(monkeypatch: pytest.MonkeyPatch) -> None:
    """The first choice's content is returned as text."""

    captured: dict[str, Any] = {}

    def _create(**kwargs: Any) -> SimpleNamespace:
        captured.update(kwargs)
        message = SimpleNamespace(content="Reply")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=None)

    fake = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=_create)))
    monkeypatch.setattr(openai_chat_mod, "create_openai_client", lambda api_key, base_url: fake)

    client = OpenAIChatClient(base_url="https://example.com/v1", model="m", api_key="k", max_tokens=10)
    result = client.generate([{"role": "user", "content": "hi"}])

    assert result == {"text": "Reply", "usage": None}
    assert captured["model"] == "m"
    assert captured["max_tokens"] == 10


def test_simple_local_client_echoes_user_text() -> None:
    """The offline client echoes the last user message."""

    reply = SimpleLocalClient().generate([{"role": "system", "content": "s"}, {"role": "user", "content": "u"}])

    assert reply["text"] == "[Local mock answer]\nu"
