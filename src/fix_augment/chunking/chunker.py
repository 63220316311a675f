"""Boundary-preserving segmentation of oversized text.

Three strategies share one assembly step:

- ``naive`` cuts every ``max_size`` characters.
- ``smart`` moves a cut that lands inside a fenced block to the nearer fence
  edge, within the ``[min_chunk_size, max_chunk_size]`` tolerance window.
- ``preserveCode`` never splits a block that fits in ``max_size``; a longer
  block is split on line ends and every piece gets synthetic fence markers.

All strategies scan the text once, front to back. Every chunk after the first
carries the trailing ``overlap_size`` characters of its predecessor as
``context_prefix``.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import NamedTuple

from ..constants import CONTEXT_OVERLAP_SIZE, MAX_CHUNK_SIZE, MIN_CHUNK_SIZE
from ..exceptions import ConfigurationError, require_positive_int, require_text
from ..telemetry import TelemetryContext, TelemetryContextProtocol
from .fences import FENCE_MARKER, FenceSpan, find_fence_spans
from .types import ChunkMode, TextChunk

log = logging.getLogger(__name__)


def _keep_escape(text: str, cut: int, floor: int) -> int:
    """Move ``cut`` back one if it would separate ``\\`` from the ``"`` it escapes."""
    if floor < cut - 1 and cut < len(text) and text[cut] == '"' and text[cut - 1] == "\\":
        return cut - 1
    return cut


class _Piece(NamedTuple):
    start: int
    end: int
    fence_reopen: str | None = None
    fence_close: str | None = None


class Chunker:
    """Splits text into ordered :class:`TextChunk` sequences.

    Holds only its thresholds; every call works on fresh state, so one
    instance can serve concurrent callers.
    """

    def __init__(
        self,
        *,
        min_chunk_size: int = MIN_CHUNK_SIZE,
        max_chunk_size: int = MAX_CHUNK_SIZE,
        overlap_size: int = CONTEXT_OVERLAP_SIZE,
        telemetry: TelemetryContextProtocol | None = None,
    ):
        require_positive_int(min_chunk_size, "min_chunk_size")
        require_positive_int(max_chunk_size, "max_chunk_size")
        if isinstance(overlap_size, bool) or not isinstance(overlap_size, int) or overlap_size < 0:
            raise ConfigurationError(
                f"overlap_size must be a non-negative integer, got {overlap_size!r}",
                code="INVALID_THRESHOLD",
                details={"overlap_size": overlap_size},
            )
        if min_chunk_size > max_chunk_size:
            raise ConfigurationError(
                "min_chunk_size must not exceed max_chunk_size",
                code="INVALID_THRESHOLD",
                details={"min_chunk_size": min_chunk_size, "max_chunk_size": max_chunk_size},
            )
        self.min_chunk_size = min_chunk_size
        self.max_chunk_size = max_chunk_size
        self.overlap_size = overlap_size
        self._tele = telemetry or TelemetryContext()

    @classmethod
    def from_config(cls, config: object, **kwargs) -> Chunker:
        """Build from any object exposing the chunk size settings as attributes."""
        return cls(
            min_chunk_size=getattr(config, "min_chunk_size", MIN_CHUNK_SIZE),
            max_chunk_size=getattr(config, "max_chunk_size", MAX_CHUNK_SIZE),
            overlap_size=getattr(config, "context_overlap_size", CONTEXT_OVERLAP_SIZE),
            **kwargs,
        )

    # --- Public strategies ---

    def chunk(
        self, text: str, max_size: int, mode: ChunkMode | str = ChunkMode.SMART
    ) -> list[TextChunk]:
        """Dispatch to the strategy named by ``mode``."""
        strategy: dict[ChunkMode, Callable[[str, int], list[TextChunk]]] = {
            ChunkMode.NAIVE: self.chunk_text,
            ChunkMode.SMART: self.smart_chunk_text,
            ChunkMode.PRESERVE_CODE: self.preserve_code_blocks,
        }
        return strategy[ChunkMode.parse(mode)](text, max_size)

    def chunk_text(self, text: str, max_size: int) -> list[TextChunk]:
        """Fixed-size split; ignores fences."""
        text, max_size = self._check(text, max_size)
        with self._tele("chunk.naive", size=len(text)):
            pieces = []
            pos = 0
            while pos < len(text):
                cut = _keep_escape(text, min(pos + max_size, len(text)), pos)
                pieces.append(_Piece(pos, cut))
                pos = cut
            return self._assemble(text, pieces)

    def smart_chunk_text(self, text: str, max_size: int) -> list[TextChunk]:
        """Fixed-size split that avoids ending a chunk inside a fenced block."""
        text, max_size = self._check(text, max_size)
        with self._tele("chunk.smart", size=len(text)):
            return self._assemble(text, self._smart_pieces(text, max_size))

    def preserve_code_blocks(self, text: str, max_size: int) -> list[TextChunk]:
        """Split that keeps every block of at most ``max_size`` whole."""
        text, max_size = self._check(text, max_size)
        with self._tele("chunk.preserve_code", size=len(text)):
            return self._assemble(text, self._preserve_pieces(text, max_size))

    # --- Boundary selection ---

    def _smart_pieces(self, text: str, max_size: int) -> list[_Piece]:
        n = len(text)
        if n <= max_size:
            return [_Piece(0, n)]

        spans = find_fence_spans(text)
        lower = min(self.min_chunk_size, max_size)
        upper = max(self.max_chunk_size, max_size)
        pieces: list[_Piece] = []
        pos = 0
        i = 0
        while n - pos > max_size:
            cut = pos + max_size
            while i < len(spans) and spans[i].end <= cut:
                i += 1
            span = spans[i] if i < len(spans) else None

            if span is not None and span.contains(cut):
                # (distance, prefer-back, target)
                options = []
                if span.start - pos >= lower:
                    options.append((cut - span.start, 0, span.start))
                if span.end - pos <= upper:
                    options.append((span.end - cut, 1, span.end))
                if options:
                    cut = min(options)[2]
                else:
                    log.debug(
                        "Fence-unsafe cut at %d: block %d-%d has no boundary within %d-%d chars",
                        cut, span.start, span.end, lower, upper,
                    )
            cut = _keep_escape(text, cut, pos)
            pieces.append(_Piece(pos, cut))
            pos = cut

        pieces.append(_Piece(pos, n))
        return pieces

    def _preserve_pieces(self, text: str, max_size: int) -> list[_Piece]:
        n = len(text)
        if n <= max_size:
            return [_Piece(0, n)]

        pieces: list[_Piece] = []
        start = 0
        for span in [*find_fence_spans(text), None]:
            prose_end = span.start if span is not None else n
            while prose_end - start > max_size:
                cut = _keep_escape(text, start + max_size, start)
                pieces.append(_Piece(start, cut))
                start = cut
            if span is None:
                break

            if len(span) <= max_size:
                if span.end - start > max_size:
                    if span.start > start:
                        pieces.append(_Piece(start, span.start))
                    start = span.start
                continue

            if span.start > start:
                pieces.append(_Piece(start, span.start))
            pieces.extend(self._split_block(text, span, max_size))
            start = span.end

        if start < n:
            pieces.append(_Piece(start, n))
        return pieces

    def _split_block(self, text: str, span: FenceSpan, max_size: int) -> list[_Piece]:
        """Cut an over-long block on line ends, fencing every piece."""
        reopen = span.opener + "\n"
        budget = max(max_size - len(reopen) - len("\n" + FENCE_MARKER), 1)
        # The last piece keeps the real closer instead of a synthetic one.
        last_budget = budget + len("\n" + FENCE_MARKER)
        # A cut never lands on the closer line, so no piece is left without code.
        limit = span.closer_start - 1 if span.closed else span.end
        first_line_end = text.find("\n", span.start, span.end)
        body_start = first_line_end + 1 if first_line_end != -1 else span.end

        bounds: list[tuple[int, int]] = []
        s = span.start
        while span.end - s > last_budget:
            floor = body_start if s == span.start else s + 1
            cut = min(s + budget, limit)
            newline = text.rfind("\n", floor, cut)
            if newline != -1:
                cut = newline + 1
            else:
                cut = _keep_escape(text, min(cut, limit - 1), floor)
            cut = max(cut, floor) if s == span.start else cut
            if cut <= s or cut >= span.end:
                break
            bounds.append((s, cut))
            s = cut
        bounds.append((s, span.end))

        log.debug("Split %d-char code block into %d pieces", len(span), len(bounds))
        pieces = []
        last = len(bounds) - 1
        for k, (s, e) in enumerate(bounds):
            close = None
            if k < last:
                close = FENCE_MARKER if text[e - 1] == "\n" else "\n" + FENCE_MARKER
            pieces.append(_Piece(s, e, reopen if k > 0 else None, close))
        return pieces

    # --- Assembly ---

    def _assemble(self, text: str, pieces: list[_Piece]) -> list[TextChunk]:
        chunks: list[TextChunk] = []
        previous: str | None = None
        for index, piece in enumerate(p for p in pieces if p.end > p.start):
            content = text[piece.start : piece.end]
            prefix = None
            if previous is not None and self.overlap_size > 0:
                prefix = previous[-self.overlap_size :]
            chunks.append(
                TextChunk(
                    content=content,
                    index=index,
                    has_context_overlap=prefix is not None,
                    context_prefix=prefix,
                    fence_reopen=piece.fence_reopen,
                    fence_close=piece.fence_close,
                )
            )
            previous = content
        self._tele.count("chunks", len(chunks))
        log.debug("Produced %d chunk(s) from %d chars", len(chunks), len(text))
        return chunks

    def _check(self, text: object, max_size: object) -> tuple[str, int]:
        return require_text(text), require_positive_int(max_size, "max_size")


_default_chunker = Chunker()


def chunk(text: str, max_size: int, mode: ChunkMode | str = ChunkMode.SMART) -> list[TextChunk]:
    """Chunk with the default thresholds."""
    return _default_chunker.chunk(text, max_size, mode)


def chunk_text(text: str, max_size: int) -> list[TextChunk]:
    return _default_chunker.chunk_text(text, max_size)


def smart_chunk_text(text: str, max_size: int) -> list[TextChunk]:
    return _default_chunker.smart_chunk_text(text, max_size)


def preserve_code_blocks(text: str, max_size: int) -> list[TextChunk]:
    return _default_chunker.preserve_code_blocks(text, max_size)
