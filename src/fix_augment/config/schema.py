"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces values from
every source (environment, files, programmatic) into the right types. Every
field is a user-facing setting of the text pipeline.
"""

from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fix_augment import constants
from fix_augment.chunking.types import ChunkMode

OutputFormat = Literal["default", "enhanced", "markdown", "html"]


class FixAugmentSettings(BaseSettings):
    """Pydantic settings schema for the fix-augment pipeline.

    Environment variables use the ``FIX_AUGMENT_`` prefix, e.g.
    ``FIX_AUGMENT_MAX_CHUNK_SIZE=6000``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIX_AUGMENT_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Feature switches ---

    enabled: bool = Field(default=True, description="Enable input and output processing")
    auto_fix_double_quotes: bool = Field(
        default=True, description="Escape double quotes before submission"
    )
    warn_large_input: bool = Field(default=True, description="Warn when input is oversized")
    suggest_task_breakdown: bool = Field(
        default=True, description="Suggest breaking complex tasks down"
    )
    context_health_monitoring: bool = Field(
        default=True, description="Track exchanges and suggest context refreshes"
    )

    # --- Thresholds ---

    max_safe_input_size: int = Field(
        default=constants.MAX_SAFE_INPUT_SIZE,
        description="Input size (characters) above which a warning is raised",
        ge=1,
    )
    complexity_threshold: int = Field(
        default=constants.COMPLEXITY_THRESHOLD,
        description="Input size (characters) from which complexity cues count",
        ge=1,
    )
    min_chunk_size: int = Field(
        default=constants.MIN_CHUNK_SIZE,
        description="Shortest chunk a fence-safe boundary may produce",
        ge=1,
    )
    max_chunk_size: int = Field(
        default=constants.MAX_CHUNK_SIZE,
        description="Longest chunk a fence-safe boundary may produce",
        ge=1,
    )
    context_overlap_size: int = Field(
        default=constants.CONTEXT_OVERLAP_SIZE,
        description="Trailing characters of a chunk repeated before the next one",
        ge=0,
    )
    context_refresh_threshold: int = Field(
        default=constants.CONTEXT_REFRESH_THRESHOLD,
        description="Exchanges after which a context refresh is suggested",
        ge=1,
    )

    # --- Modes ---

    chunk_mode: ChunkMode = Field(default=ChunkMode.SMART, description="Chunking strategy")
    output_format: OutputFormat = Field(
        default=constants.DEFAULT_OUTPUT_FORMAT, description="Reply formatting"
    )

    @field_validator("chunk_mode", mode="before")
    @classmethod
    def parse_chunk_mode(cls, v: Any) -> Any:
        """Accept ``preserve_code`` and any casing for ``preserveCode``."""
        if isinstance(v, str) and not isinstance(v, ChunkMode):
            aliases = {m.value.lower(): m for m in ChunkMode}
            aliases["preserve_code"] = ChunkMode.PRESERVE_CODE
            normalized = v.strip().lower()
            if normalized in aliases:
                return aliases[normalized]
        return v

    @model_validator(mode="after")
    def validate_chunk_window(self) -> "FixAugmentSettings":
        """Keep the chunk tolerance window and overlap consistent."""
        if self.min_chunk_size > self.max_chunk_size:
            raise ValueError(
                f"min_chunk_size ({self.min_chunk_size}) must not exceed "
                f"max_chunk_size ({self.max_chunk_size})"
            )
        if self.context_overlap_size >= self.min_chunk_size:
            raise ValueError(
                f"context_overlap_size ({self.context_overlap_size}) must be "
                f"smaller than min_chunk_size ({self.min_chunk_size})"
            )
        return self

    @classmethod
    def default_values(cls) -> dict[str, Any]:
        """Schema defaults, without reading the environment."""
        return {name: field.get_default() for name, field in cls.model_fields.items()}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for SourceMap annotation."""
        return {name: getattr(self, name) for name in type(self).model_fields}
