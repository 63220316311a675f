"""Data types produced by the chunker.

A chunk keeps three views of itself:

- ``content``: its exact slice of the original text. Joining every chunk's
  content rebuilds the input.
- ``body``: ``content`` wrapped in synthetic fence markers when the chunk is a
  piece of an over-long code block, so the piece is well-formed on its own.
- ``payload``: ``context_prefix`` followed by ``body``, i.e. what a host sends.
"""

from __future__ import annotations

import dataclasses
import enum

from ..exceptions import ValidationError


class ChunkMode(enum.StrEnum):
    """Segmentation strategies accepted by :func:`fix_augment.chunking.chunk`."""

    NAIVE = "naive"
    SMART = "smart"
    PRESERVE_CODE = "preserveCode"

    @classmethod
    def parse(cls, value: str | ChunkMode) -> ChunkMode:
        try:
            return cls(value)
        except ValueError as e:
            allowed = ", ".join(m.value for m in cls)
            raise ValidationError(
                f"Unknown chunk mode {value!r} (expected one of: {allowed})",
                code="INVALID_MODE",
                details={"mode": value},
            ) from e


@dataclasses.dataclass(frozen=True, slots=True)
class TextChunk:
    """One ordered segment of a split text."""

    content: str
    index: int
    has_context_overlap: bool = False
    context_prefix: str | None = None
    fence_reopen: str | None = None
    fence_close: str | None = None

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("index must be >= 0")
        if self.has_context_overlap != (self.context_prefix is not None):
            raise ValueError("has_context_overlap must agree with context_prefix")

    @property
    def body(self) -> str:
        return (self.fence_reopen or "") + self.content + (self.fence_close or "")

    @property
    def payload(self) -> str:
        return (self.context_prefix or "") + self.body

    @property
    def is_code_continuation(self) -> bool:
        """True for pieces of an over-long block that carry synthetic fences."""
        return self.fence_reopen is not None or self.fence_close is not None
