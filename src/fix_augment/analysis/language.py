"""Heuristic programming-language detection.

This is pattern scoring, not parsing: false positives and negatives are
expected and never raise.
"""

from __future__ import annotations

import dataclasses
import logging

from ..constants import CONFIDENCE_PER_MATCH, MIN_DETECTION_CONFIDENCE
from ..exceptions import require_text
from ..patterns import DEFAULT_CATALOG, PatternCatalog

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class LanguageMatch:
    """Best language guess; ``confidence == 0`` means nothing was detected."""

    language: str | None = None
    confidence: float = 0.0

    @property
    def detected(self) -> bool:
        return self.language is not None and self.confidence > 0


NO_MATCH = LanguageMatch()


class LanguageDetector:
    """Scores every catalog language against a snippet and keeps the best."""

    def __init__(
        self,
        catalog: PatternCatalog = DEFAULT_CATALOG,
        *,
        per_match: float = CONFIDENCE_PER_MATCH,
        threshold: float = MIN_DETECTION_CONFIDENCE,
    ):
        self.catalog = catalog
        self.per_match = per_match
        self.threshold = threshold

    def score(self, code: str) -> list[LanguageMatch]:
        """All matching languages, best first; ties keep catalog order."""
        candidates = []
        for language, pattern in self.catalog.languages.items():
            hits = sum(1 for _ in pattern.finditer(code))
            if hits:
                candidates.append(
                    LanguageMatch(language, min(hits * self.per_match, 1.0))
                )
        # sort is stable, so declaration order survives among equal scores
        candidates.sort(key=lambda m: m.confidence, reverse=True)
        return candidates

    def detect(self, code: str) -> LanguageMatch:
        require_text(code, "code")
        if not code.strip():
            return NO_MATCH

        candidates = self.score(code)
        if candidates and candidates[0].confidence > self.threshold:
            log.debug(
                "Detected %s (confidence %.2f)",
                candidates[0].language,
                candidates[0].confidence,
            )
            return candidates[0]
        return NO_MATCH


_default_detector = LanguageDetector()


def detect_language(code: str) -> LanguageMatch:
    """Detect with the default catalog."""
    return _default_detector.detect(code)
