"""Constant enumerations for configuration options."""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class ConfigOption(NamedTuple):
    """Metadata for a configuration option."""

    value: str
    description: str
    default: bool = False


class LLMProvider(Enum):
    """Text generation provider options."""

    OPENAI = ConfigOption("openai", "OpenAI-compatible chat completions API (e.g. DeepSeek)", True)
    LOCAL = ConfigOption("local", "Offline echo client")


class StudyTool(Enum):
    """Study tools backed by the text generator."""

    EXPLAIN = ConfigOption("explain", "Explain the selected legal text", True)
    EXAMPLES = ConfigOption("examples", "Give practical examples")
    QUESTIONS = ConfigOption("questions", "Draft exam-style questions")
    CUSTOM = ConfigOption("custom", "Answer a user question about the text")


class LogLevel(Enum):
    """Logging level options."""

    DEBUG = ConfigOption("DEBUG", "Verbose debug logging")
    INFO = ConfigOption("INFO", "Standard info logging", True)
    WARNING = ConfigOption("WARNING", "Warnings only")
    ERROR = ConfigOption("ERROR", "Errors only")


def option_value(member: Enum) -> str:
    """Return the config string of a ConfigOption enum member."""

    return getattr(member.value, "value", member.value)


def coerce_config_enum(enum_cls: type, value: object):
    """Coerce string or enum value to the given ConfigOption Enum."""

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:  # type: ignore[attr-defined]
            # member.value is ConfigOption; member.value.value is the string in config
            if getattr(member.value, "value", None) == value or member.name == value:
                return member
    raise ValueError(f"Invalid value {value!r} for enum {enum_cls.__name__}")


__all__ = [
    "ConfigOption",
    "LLMProvider",
    "StudyTool",
    "LogLevel",
    "option_value",
    "coerce_config_enum",
]
