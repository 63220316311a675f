"""Size and complexity classification for assistant-bound text."""

from __future__ import annotations

import dataclasses
import logging
import math

from ..constants import COMPLEXITY_THRESHOLD, MAX_SAFE_INPUT_SIZE
from ..exceptions import require_positive_int, require_text
from ..patterns import DEFAULT_CATALOG, PatternCatalog

log = logging.getLogger(__name__)

_BREAKDOWN_TEMPLATE = (
    "This looks like a complex task. Consider breaking it down:",
    "",
    "1. Start with the main structure or skeleton",
    "2. Implement core functionality first",
    "3. Add features incrementally",
    "4. Test and refine each component",
    '5. Use "continue from where you left off" for incomplete responses',
    "",
    "Benefits:",
    '- Prevents "too large input" errors',
    "- Reduces credit loss from failed operations",
    "- Allows for better quality control",
    "- Easier to debug and iterate",
)


@dataclasses.dataclass(frozen=True, slots=True)
class SizeCheck:
    """Outcome of :meth:`TextClassifier.check_size`."""

    is_large: bool
    size_chars: int
    max_safe_size: int
    recommended_chunks: int
    suggestion: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class TextClassification:
    """Derived view of a text; recomputed on every call, never persisted."""

    is_oversized: bool
    size_chars: int
    recommended_chunks: int
    is_complex: bool
    complexity_reason: str | None = None


class TextClassifier:
    """Classifies text by size and by how much work it asks for."""

    def __init__(self, catalog: PatternCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    def check_size(self, text: str, max_safe_size: int = MAX_SAFE_INPUT_SIZE) -> SizeCheck:
        """Compare ``len(text)`` to ``max_safe_size`` and advise a chunk count."""
        require_text(text)
        require_positive_int(max_safe_size, "max_safe_size")

        size = len(text)
        chunks = math.ceil(size / max_safe_size)
        if size <= max_safe_size:
            return SizeCheck(
                is_large=False,
                size_chars=size,
                max_safe_size=max_safe_size,
                recommended_chunks=chunks,
            )

        suggestion = (
            f"Input is {size} characters (recommended max: {max_safe_size}). "
            f"Consider breaking this into {chunks} smaller tasks to avoid "
            '"too large input" errors and credit consumption.'
        )
        log.debug("Input of %d chars exceeds %d; %d chunks advised", size, max_safe_size, chunks)
        return SizeCheck(
            is_large=True,
            size_chars=size,
            max_safe_size=max_safe_size,
            recommended_chunks=chunks,
            suggestion=suggestion,
        )

    def detect_complexity(
        self, text: str, complexity_threshold: int = COMPLEXITY_THRESHOLD
    ) -> str | None:
        """Return task-breakdown advice, or None for simple or short text.

        Advice is only produced when the text is longer than
        ``complexity_threshold`` and matches a complexity indicator.
        """
        require_text(text)
        require_positive_int(complexity_threshold, "complexity_threshold")

        if len(text) <= complexity_threshold:
            return None
        if not any(p.search(text) for p in self.catalog.complexity_indicators):
            return None

        lines = list(_BREAKDOWN_TEMPLATE)
        for cue, advice in self.catalog.breakdown_cues:
            if cue.search(text):
                lines.extend(("", advice))
        return "\n".join(lines)

    def classify(
        self,
        text: str,
        max_safe_size: int = MAX_SAFE_INPUT_SIZE,
        complexity_threshold: int = COMPLEXITY_THRESHOLD,
    ) -> TextClassification:
        size = self.check_size(text, max_safe_size)
        reason = self.detect_complexity(text, complexity_threshold)
        return TextClassification(
            is_oversized=size.is_large,
            size_chars=size.size_chars,
            recommended_chunks=size.recommended_chunks,
            is_complex=reason is not None,
            complexity_reason=reason,
        )
