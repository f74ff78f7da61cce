"""Study tools that send flattened law text to a text generator."""
from __future__ import annotations

import logging
import re
from typing import Sequence

from law_hierarchy_studio.config.constants import StudyTool, coerce_config_enum
from law_hierarchy_studio.data.law_elements import LawElement, display_title
from law_hierarchy_studio.hierarchy.builder import DEFAULT_MAX_DEPTH
from law_hierarchy_studio.hierarchy.flatten import flatten_full
from law_hierarchy_studio.llm.base import ChatMessage, GenerationResponse, TextGenerator

logger = logging.getLogger(__name__)

_SYSTEM_PROMPTS = {
    StudyTool.EXPLAIN: (
        "You are an assistant specialised in Brazilian law. Explain legal provisions "
        "clearly and didactically for law students.\n\n"
        "Instructions:\n"
        "- Give clear, objective explanations\n"
        "- Use accessible language, technical where needed\n"
        "- Highlight the main points and concepts\n"
        "- Include practical examples when possible\n"
        "- Keep an educational focus"
    ),
    StudyTool.EXAMPLES: (
        "You are a law professor specialised in practical cases. Create real examples "
        "and concrete situations that illustrate how legal provisions apply."
    ),
    StudyTool.QUESTIONS: (
        "You are an expert in writing questions for Brazilian public service exams and "
        "law exams, in the style of the major exam boards (CESPE, FCC, FGV)."
    ),
    StudyTool.CUSTOM: (
        "You are an assistant specialised in Brazilian law helping a student understand "
        "a specific legal provision. Answer precisely and cite the text when relevant."
    ),
}

_QUESTION_INSTRUCTIONS = {
    "multiple_choice": (
        "Write 6 multiple choice questions:\n"
        "- 5 options each (A, B, C, D, E), exactly one correct\n"
        "- Plausible, well-built distractors\n"
        "- Mixed difficulty (2 easy, 2 medium, 2 hard)\n"
        "- Include the correct answers with explanations"
    ),
    "true_false": (
        "Write 6 true or false statements:\n"
        "- Clear, objective statements\n"
        "- Detailed justification for each answer\n"
        "- Mixed difficulty (2 easy, 2 medium, 2 hard)\n"
        "- Include the correct answers with explanations"
    ),
    "essay": (
        "Write 6 essay questions:\n"
        "- Questions that require reflection and analysis\n"
        "- Detailed expected answers (at least 100 words each)\n"
        "- Mixed difficulty (2 easy, 2 medium, 2 hard)\n"
        "- Include the complete expected answers"
    ),
}

_DEFAULT_QUESTION_INSTRUCTIONS = (
    "Please write:\n"
    "1. 3 multiple choice questions (A, B, C, D, E)\n"
    "2. 2 true or false questions with justification\n"
    "3. 1 short essay question\n\n"
    "Format the questions clearly and include the correct answers with explanations."
)

_INTRO_PATTERNS = [
    re.compile(r"^Sure!\s*", re.IGNORECASE),
    re.compile(r"^Certainly!\s*", re.IGNORECASE),
    re.compile(r"^Of course!\s*", re.IGNORECASE),
    re.compile(r"^Great question[\s\S]*?[.!]\s*", re.IGNORECASE),
    re.compile(r"^Let's (?:analy[sz]e|break)[\s\S]*?\.\s*", re.IGNORECASE),
    re.compile(r"^Claro!\s*", re.IGNORECASE),
    re.compile(r"^Certamente!\s*", re.IGNORECASE),
    re.compile(r"^Perfeito!\s*", re.IGNORECASE),
]

_OUTRO_PATTERNS = [
    re.compile(r"I hope (?:this|that)[\s\S]*?[!.]\s*$", re.IGNORECASE),
    re.compile(r"Good luck[\s\S]*?[!.]\s*$", re.IGNORECASE),
    re.compile(r"If you (?:have|need)[\s\S]*?[!.]\s*$", re.IGNORECASE),
    re.compile(r"Bons estudos[\s\S]*?[!.]\s*$", re.IGNORECASE),
    re.compile(r"Boa sorte[\s\S]*?[!.]\s*$", re.IGNORECASE),
    re.compile(r"[😊👍🙂][\s\S]*$"),
]

_EXTRA_BLANK_LINES = re.compile(r"\n\s*\n\s*\n")


def clean_generated_text(text: str) -> str:
    """Strip stock greetings and sign-offs from generated text.

    Args:
        text: Raw generator reply.

    Returns:
        Reply without intro/outro phrases and with at most one blank line in a row.
    """
    cleaned = text.strip()
    for pattern in _INTRO_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    for pattern in _OUTRO_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = _EXTRA_BLANK_LINES.sub("\n\n", cleaned)
    return cleaned.strip()


def build_messages(
    tool: StudyTool,
    title: str,
    text: str,
    question: str | None = None,
    question_type: str | None = None,
) -> list[ChatMessage]:
    """Build the chat messages for one study tool.

    Args:
        tool: Study tool to run.
        title: Heading of the legal text.
        text: Full flattened legal text.
        question: User question, required by the custom tool.
        question_type: ``multiple_choice``, ``true_false`` or ``essay`` for the
            questions tool; anything else asks for a mix.

    Returns:
        System and user messages.

    Raises:
        ValueError: If the custom tool is used without a question.
    """
    header = f"**{title}**\n\n{text}"
    if tool is StudyTool.EXPLAIN:
        user = (
            f"Please explain the following legal provision didactically:\n\n{header}\n\n"
            "Cover:\n1. What the provision means\n2. Its main elements\n"
            "3. How it applies in practice\n4. Key points to memorise"
        )
    elif tool is StudyTool.EXAMPLES:
        user = (
            f"Based on the following legal provision, give practical examples:\n\n{header}\n\n"
            "Please provide:\n1. 2-3 concrete practical examples\n"
            "2. Everyday situations where it applies\n3. Hypothetical cases\n"
            "4. Differences from similar provisions, if any"
        )
    elif tool is StudyTool.QUESTIONS:
        instructions = _QUESTION_INSTRUCTIONS.get(question_type or "", _DEFAULT_QUESTION_INSTRUCTIONS)
        user = f"Based on the following legal provision, write exam questions:\n\n{header}\n\n{instructions}"
    else:
        if not question or not question.strip():
            raise ValueError("The custom study tool requires a non-empty question.")
        user = f"Legal text:\n\n{header}\n\nQuestion: {question.strip()}"
    return [
        {"role": "system", "content": _SYSTEM_PROMPTS[tool]},
        {"role": "user", "content": user},
    ]


class StudyAssistant:
    """Runs study tools over a law element and its whole subtree."""

    def __init__(self, generator: TextGenerator, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """Initialize assistant.

        Args:
            generator: Text generation collaborator.
            max_depth: Depth limit used when flattening subtrees.
        """
        self.generator = generator
        self.max_depth = max_depth

    def run(
        self,
        tool: StudyTool | str,
        element: LawElement,
        all_elements: Sequence[LawElement],
        question: str | None = None,
        question_type: str | None = None,
    ) -> GenerationResponse:
        """Run one tool on an element.

        The generator always receives the uncapped text, never the
        display-truncated one.

        Args:
            tool: Study tool or its config string.
            element: Element whose subtree is studied.
            all_elements: Every element of the law.
            question: User question for the custom tool.
            question_type: Question style for the questions tool.

        Returns:
            Cleaned generator reply.
        """
        resolved: StudyTool = coerce_config_enum(StudyTool, tool)
        title = element.get("title") or display_title(element)
        text = flatten_full(element, all_elements, self.max_depth)
        messages = build_messages(resolved, title, text, question=question, question_type=question_type)
        logger.info("Running study tool %s on element %s (%d chars)", resolved.name, element["id"], len(text))
        response = self.generator.generate(messages)
        return {"text": clean_generated_text(response.get("text", "")), "usage": response.get("usage")}


__all__ = ["clean_generated_text", "build_messages", "StudyAssistant"]
