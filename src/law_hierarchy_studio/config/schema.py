"""Configuration schema definitions using Pydantic."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from law_hierarchy_studio.config.constants import LLMProvider, LogLevel, coerce_config_enum
from law_hierarchy_studio.data.law_elements import ElementType


class DataConfig(BaseModel):
    """Law element source settings."""

    elements_path: Path = Field(..., description="JSON or JSONL export of law elements")
    default_law_id: Optional[str] = Field(None, description="Law opened when none is given")


class HierarchyConfig(BaseModel):
    """Tree building and selection settings."""

    selectable_types: list[str] = Field(
        default_factory=lambda: ["title", "chapter", "subsection"],
        description="Element types that can be toggled directly",
    )
    max_depth: int = Field(256, description="Deepest parent chain accepted before it is cut")

    @field_validator("selectable_types")
    @classmethod
    def _check_types(cls, v: list[str]) -> list[str]:
        known = {member.value for member in ElementType}
        unknown = [t for t in v if t not in known]
        if unknown:
            raise ValueError(f"Unknown element types in hierarchy.selectable_types: {unknown}")
        return v

    @field_validator("max_depth")
    @classmethod
    def _check_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError("hierarchy.max_depth must be at least 1")
        return v


class FlattenConfig(BaseModel):
    """Content flattening settings."""

    display_max_chars: int = Field(2000, description="Display cap in characters")
    ellipsis: str = Field("...", description="Marker appended to truncated text")

    @field_validator("display_max_chars")
    @classmethod
    def _check_cap(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("flatten.display_max_chars must be positive")
        return v


class OpenAIConfig(BaseModel):
    """OpenAI-compatible provider settings."""

    base_url: str = Field("https://api.deepseek.com/v1", description="API base URL")
    api_key_env: str = Field("DEEPSEEK_API_KEY", description="Environment variable containing API key")


class LlmConfig(BaseModel):
    """Text generation configuration."""

    provider: LLMProvider = Field(LLMProvider.OPENAI, description="Provider")
    model: str = Field("deepseek-chat", description="Model name")
    max_tokens: int = Field(4000, description="Completion token budget")
    temperature: float = Field(0.7, description="Sampling temperature")
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)

    @field_validator("provider", mode="before")
    @classmethod
    def _coerce_provider(cls, v: object) -> LLMProvider:
        return coerce_config_enum(LLMProvider, v)


class ServeConfig(BaseModel):
    """Serve mode configuration."""

    host: str = Field("0.0.0.0", description="Host for server")
    port: int = Field(8000, description="Port for server")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Logging level")
    log_dir: Path = Field(Path("./logs"), description="Directory for run.log")

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_log_level(cls, v: object) -> LogLevel:
        return coerce_config_enum(LogLevel, v)


class AppConfig(BaseModel):
    """Full application configuration."""

    data: DataConfig
    hierarchy: HierarchyConfig = Field(default_factory=HierarchyConfig)
    flatten: FlattenConfig = Field(default_factory=FlattenConfig)
    llm: LlmConfig = Field(default_factory=LlmConfig)
    serve: ServeConfig = Field(default_factory=ServeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


__all__ = [
    "AppConfig",
    "DataConfig",
    "HierarchyConfig",
    "FlattenConfig",
    "OpenAIConfig",
    "LlmConfig",
    "ServeConfig",
    "LoggingConfig",
]
