"""Session counters for context-health monitoring.

One long-lived coordinator owns a :class:`SessionCounters`; the host persists
it through :meth:`SessionCounters.export_session_data` and restores it with
:meth:`SessionCounters.import_session_data`. Access is not synchronized: the
host serializes calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import dataclasses
import enum
import logging
import math
import time
from typing import Any, TypeAlias

from .constants import CONTEXT_REFRESH_THRESHOLD, CONTEXT_WARNING_RATIO
from .exceptions import ValidationError, require_positive_int

log = logging.getLogger(__name__)

Clock: TypeAlias = Callable[[], int]

# Persisted record key -> attribute name
_RECORD_FIELDS = {
    "contextExchangeCount": "exchange_count",
    "sessionStartTime": "session_start_time",
    "lastContextRefresh": "last_context_refresh",
    "filesProcessed": "files_processed",
}


def epoch_ms() -> int:
    return time.time_ns() // 1_000_000


class HealthStatus(enum.StrEnum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclasses.dataclass(frozen=True, slots=True)
class ContextHealth:
    status: HealthStatus
    text: str


@dataclasses.dataclass(frozen=True, slots=True)
class SessionStats:
    duration: str
    exchanges: int
    files_processed: int
    last_refresh: str


def format_duration(ms: int) -> str:
    """Compact duration: ``1d 2h``, ``3h 5m``, ``4m`` or ``9s``."""
    seconds = ms // 1000
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    if days > 0:
        return f"{days}d {hours % 24}h"
    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m"
    return f"{seconds}s"


def format_time_ago(timestamp_ms: int, now_ms: int | None = None) -> str:
    now_ms = epoch_ms() if now_ms is None else now_ms
    minutes = (now_ms - timestamp_ms) // 60_000
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


class SessionCounters:
    """Exchange and file counters with session timestamps (epoch milliseconds)."""

    def __init__(self, clock: Clock = epoch_ms):
        self._clock = clock
        now = clock()
        self.exchange_count = 0
        self.files_processed = 0
        self.session_start_time = now
        self.last_context_refresh = now

    def increment_exchange_count(self) -> int:
        self.exchange_count += 1
        log.debug("Context exchange count: %d", self.exchange_count)
        return self.exchange_count

    def reset_exchange_count(self) -> None:
        self.exchange_count = 0
        self.last_context_refresh = self._clock()
        log.info("Context exchange count reset")

    def increment_files_processed(self) -> int:
        self.files_processed += 1
        log.debug("Files processed: %d", self.files_processed)
        return self.files_processed

    def reset_session(self) -> None:
        now = self._clock()
        self.exchange_count = 0
        self.files_processed = 0
        self.session_start_time = now
        self.last_context_refresh = now
        log.info("Session reset")

    def context_health(self, threshold: int = CONTEXT_REFRESH_THRESHOLD) -> ContextHealth:
        """Green below 70% of ``threshold``, yellow up to it, red from it on."""
        require_positive_int(threshold, "threshold")
        count = self.exchange_count
        if count >= threshold:
            return ContextHealth(HealthStatus.RED, f"Context refresh needed ({count} exchanges)")
        if count >= math.floor(threshold * CONTEXT_WARNING_RATIO):
            return ContextHealth(HealthStatus.YELLOW, f"Context getting long ({count} exchanges)")
        return ContextHealth(HealthStatus.GREEN, f"Context healthy ({count} exchanges)")

    def should_refresh_context(self, threshold: int = CONTEXT_REFRESH_THRESHOLD) -> bool:
        require_positive_int(threshold, "threshold")
        return self.exchange_count >= threshold

    @property
    def session_duration_ms(self) -> int:
        return self._clock() - self.session_start_time

    @property
    def time_since_refresh_ms(self) -> int:
        return self._clock() - self.last_context_refresh

    def stats(self) -> SessionStats:
        return SessionStats(
            duration=format_duration(self.session_duration_ms),
            exchanges=self.exchange_count,
            files_processed=self.files_processed,
            last_refresh=format_time_ago(self.last_context_refresh, self._clock()),
        )

    def export_session_data(self) -> dict[str, int]:
        """Flat record in the host's persisted layout."""
        return {key: getattr(self, attr) for key, attr in _RECORD_FIELDS.items()}

    def import_session_data(self, data: Mapping[str, Any]) -> None:
        """Restore from a (possibly partial) record; unknown keys are ignored.

        The record is checked in full before anything is applied.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Session data must be a mapping",
                code="INVALID_SESSION_DATA",
                details={"type": type(data).__name__},
            )
        updates = {}
        for key, attr in _RECORD_FIELDS.items():
            if key not in data:
                continue
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(
                    f"Session field {key} must be a non-negative integer",
                    code="INVALID_SESSION_DATA",
                    details={key: value},
                )
            updates[attr] = value
        for attr, value in updates.items():
            setattr(self, attr, value)
        log.info("Session data imported")
