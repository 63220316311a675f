"""Validation facade: one report per text, plus small structural checks."""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
import logging

from .analysis.classifier import TextClassification, TextClassifier
from .constants import (
    ALLOWED_WEBVIEW_COMMANDS,
    COMPLEX_TASK_WARNING,
    COMPLEXITY_THRESHOLD,
    MAX_SAFE_INPUT_SIZE,
    UNESCAPED_QUOTES_WARNING,
)
from .exceptions import ValidationError, require_positive_int
from .sanitize import has_unescaped_quotes
from .sanitize import validate_path as validate_path
from .telemetry import TelemetryContext, TelemetryContextProtocol

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of :meth:`InputValidator.validate`; owned by the caller."""

    is_valid: bool
    warnings: tuple[str, ...]
    classification: TextClassification
    has_unescaped_quotes: bool
    suggestion: str | None = None

    @property
    def needs_breakdown(self) -> bool:
        return self.classification.is_complex


class InputValidator:
    """Composes quote, size and complexity checks into a :class:`ValidationReport`.

    ``warn_large_input`` and ``suggest_task_breakdown`` switch the matching
    warnings off without changing the classification itself.
    """

    def __init__(
        self,
        classifier: TextClassifier | None = None,
        *,
        max_safe_input_size: int = MAX_SAFE_INPUT_SIZE,
        complexity_threshold: int = COMPLEXITY_THRESHOLD,
        warn_large_input: bool = True,
        suggest_task_breakdown: bool = True,
        telemetry: TelemetryContextProtocol | None = None,
    ):
        self.classifier = classifier or TextClassifier()
        self.max_safe_input_size = require_positive_int(
            max_safe_input_size, "max_safe_input_size"
        )
        self.complexity_threshold = require_positive_int(
            complexity_threshold, "complexity_threshold"
        )
        self.warn_large_input = warn_large_input
        self.suggest_task_breakdown = suggest_task_breakdown
        self._tele = telemetry or TelemetryContext()

    @classmethod
    def from_config(cls, config: object, **kwargs) -> InputValidator:
        return cls(
            max_safe_input_size=getattr(config, "max_safe_input_size", MAX_SAFE_INPUT_SIZE),
            complexity_threshold=getattr(config, "complexity_threshold", COMPLEXITY_THRESHOLD),
            warn_large_input=getattr(config, "warn_large_input", True),
            suggest_task_breakdown=getattr(config, "suggest_task_breakdown", True),
            **kwargs,
        )

    def validate(self, text: str) -> ValidationReport:
        """Validate ``text``; raises ValidationError unless it is a non-empty string."""
        if not isinstance(text, str) or not text:
            raise ValidationError(
                "Invalid input: text must be a non-empty string",
                code="INVALID_TEXT",
                details={"type": type(text).__name__},
            )

        with self._tele("validation.validate", size=len(text)):
            size = self.classifier.check_size(text, self.max_safe_input_size)
            reason = self.classifier.detect_complexity(text, self.complexity_threshold)
            quotes = has_unescaped_quotes(text)

            warnings: list[str] = []
            if size.is_large and self.warn_large_input:
                warnings.append(size.suggestion or "Input size exceeds recommended limit")
            if quotes:
                warnings.append(UNESCAPED_QUOTES_WARNING)
            if reason is not None and self.suggest_task_breakdown:
                warnings.append(COMPLEX_TASK_WARNING)

            classification = TextClassification(
                is_oversized=size.is_large,
                size_chars=size.size_chars,
                recommended_chunks=size.recommended_chunks,
                is_complex=reason is not None,
                complexity_reason=reason,
            )
            report = ValidationReport(
                is_valid=not warnings,
                warnings=tuple(warnings),
                classification=classification,
                has_unescaped_quotes=quotes,
                suggestion=reason or size.suggestion,
            )
        log.debug("Validated %d chars: %d warning(s)", len(text), len(warnings))
        return report


def validate_webview_message(message: object) -> bool:
    """True only for a mapping whose ``command`` is a whitelisted string."""
    if not isinstance(message, Mapping):
        return False
    command = message.get("command")
    if not command or not isinstance(command, str):
        return False
    return command in ALLOWED_WEBVIEW_COMMANDS
