"""Fenced code block scanning.

A fence marker is a line whose first non-blank characters (after at most
three spaces) are three backticks. Markers pair up in the order they appear;
an opener left without a partner runs to the end of the text.

Backticks in the middle of a line (``text```python``) are not markers here,
while the reply formatter (``response.formatter``) matches fences anywhere in
a line. Such a mid-line fence leaves its real closing line unpaired, so the
chunker reads it as an opener that runs to the end of the text.
"""

from __future__ import annotations

from collections.abc import Iterator
import dataclasses
import re

FENCE_MARKER = "```"

_MARKER_LINE = re.compile(r"^ {0,3}```[^\n]*$", re.MULTILINE)


@dataclasses.dataclass(frozen=True, slots=True)
class FenceSpan:
    """Character range of one fenced block.

    ``end`` points past the closing line (including its newline when there is
    one), or at ``len(text)`` for an unclosed block. ``closer_start`` is where
    the closing marker line begins, or None when unclosed.
    """

    start: int
    end: int
    opener: str
    closed: bool
    closer_start: int | None = None

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        """True if a cut at ``offset`` would fall strictly inside the block."""
        return self.start < offset < self.end


def iter_fence_markers(text: str) -> Iterator[re.Match[str]]:
    """Yield each marker line in order."""
    return _MARKER_LINE.finditer(text)


def count_fence_markers(text: str) -> int:
    return sum(1 for _ in iter_fence_markers(text))


def find_fence_spans(text: str) -> list[FenceSpan]:
    """Pair markers into spans with one forward scan of ``text``."""
    spans: list[FenceSpan] = []
    opening: re.Match[str] | None = None
    for marker in iter_fence_markers(text):
        if opening is None:
            opening = marker
            continue
        end = marker.end()
        if end < len(text) and text[end] == "\n":
            end += 1
        spans.append(
            FenceSpan(
                start=opening.start(),
                end=end,
                opener=opening.group().strip(),
                closed=True,
                closer_start=marker.start(),
            )
        )
        opening = None

    if opening is not None:
        spans.append(
            FenceSpan(
                start=opening.start(),
                end=len(text),
                opener=opening.group().strip(),
                closed=False,
            )
        )
    return spans
