"""Splitting oversized text into ordered, fence-aware chunks."""

from .chunker import Chunker, chunk, chunk_text, preserve_code_blocks, smart_chunk_text
from .fences import FenceSpan, count_fence_markers, find_fence_spans
from .types import ChunkMode, TextChunk

__all__ = [
    "ChunkMode",
    "Chunker",
    "FenceSpan",
    "TextChunk",
    "chunk",
    "chunk_text",
    "count_fence_markers",
    "find_fence_spans",
    "preserve_code_blocks",
    "smart_chunk_text",
]
