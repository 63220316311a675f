"""Exceptions for the fix-augment text pipeline.

Every error carries a stable ``kind``, an optional machine-readable ``code``
and a free-form ``details`` payload plus a timestamp, so the host can log the
failure in structured form without losing the original cause.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from datetime import UTC, datetime
import enum
import logging
from typing import Any, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(enum.StrEnum):
    """Stable error categories."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UI_ERROR = "UI_ERROR"
    ASSISTANT_API_ERROR = "ASSISTANT_API_ERROR"


class FixAugmentError(Exception):
    """Base exception for fix-augment errors"""  # noqa: D415

    kind: ErrorKind = ErrorKind.PROCESSING_ERROR

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = dict(details) if details else None
        self.timestamp = datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        """Structured form for logging."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "kind": self.kind.value,
            "code": self.code,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "cause": repr(self.__cause__) if self.__cause__ else None,
        }


class ValidationError(FixAugmentError):
    """Raised when input is structurally invalid (wrong type, missing)"""  # noqa: D415

    kind = ErrorKind.VALIDATION_ERROR


class ProcessingError(FixAugmentError):
    """Raised when a transform fails during formatting or chunking"""  # noqa: D415

    kind = ErrorKind.PROCESSING_ERROR


class ConfigurationError(FixAugmentError):
    """Raised for bad configuration values or thresholds"""  # noqa: D415

    kind = ErrorKind.CONFIGURATION_ERROR


class UIError(FixAugmentError):
    """Raised by hosts when a UI component cannot be displayed"""  # noqa: D415

    kind = ErrorKind.UI_ERROR


class AssistantAPIError(FixAugmentError):
    """Raised by hosts when the assistant backend rejects a request"""  # noqa: D415

    kind = ErrorKind.ASSISTANT_API_ERROR


# --- Argument guards ---


def require_text(value: object, name: str = "text") -> str:
    """Return ``value`` if it is a string, else raise ValidationError."""
    if not isinstance(value, str):
        raise ValidationError(
            f"{name} must be a string, got {type(value).__name__}",
            code="INVALID_TEXT",
            details={"argument": name},
        )
    return value


def require_positive_int(value: object, name: str) -> int:
    """Return ``value`` if it is a positive int, else raise ConfigurationError."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"{name} must be a positive integer, got {value!r}",
            code="INVALID_THRESHOLD",
            details={name: value},
        )
    return value


# --- Command boundary helpers (host layer only) ---


def describe_error(error: BaseException, context: str | None = None) -> str:
    """Build the single human-readable message shown to the user."""
    message = error.message if isinstance(error, FixAugmentError) else str(error)
    if not message:
        message = type(error).__name__
    return f"{context}: {message}" if context else message


def _report(error: Exception, context: str | None) -> None:
    if isinstance(error, FixAugmentError):
        log.error(
            "[%s] %s", error.kind.value, describe_error(error, context),
            extra={"error": error.to_dict()},
            exc_info=error,
        )
    else:
        log.error("%s", describe_error(error, context), exc_info=error)


def guard(
    fn: Callable[[], T],
    *,
    context: str | None = None,
    on_error: Callable[[str], None] | None = None,
) -> T | None:
    """Run ``fn``; on failure log it, report one message and return None."""
    try:
        return fn()
    except Exception as e:
        _report(e, context)
        if on_error is not None:
            on_error(describe_error(e, context))
        return None


async def guard_async(
    fn: Callable[[], Awaitable[T]],
    *,
    context: str | None = None,
    on_error: Callable[[str], None] | None = None,
) -> T | None:
    """Awaitable variant of :func:`guard`."""
    try:
        return await fn()
    except Exception as e:
        _report(e, context)
        if on_error is not None:
            on_error(describe_error(e, context))
        return None
