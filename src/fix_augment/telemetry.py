"""Telemetry scopes and reporters.

Near-zero overhead no-op behavior when disabled; nested timing scopes and
metrics routed to reporters when enabled via ``FIX_AUGMENT_TELEMETRY=1`` or
``DEBUG=1``.
"""

from collections import deque
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os
import time
from types import TracebackType
from typing import Any, Protocol, Self, TypeAlias, runtime_checkable

log = logging.getLogger(__name__)

_scope_stack_var: ContextVar[tuple[str, ...]] = ContextVar(
    "fix_augment_scope_stack",
    default=(),
)


def telemetry_enabled() -> bool:
    """Whether telemetry flags are set in the environment."""
    return os.getenv("FIX_AUGMENT_TELEMETRY") == "1" or os.getenv("DEBUG") == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Duck-typed protocol for telemetry reporters."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...  # noqa: D102
    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class _NoOpTelemetryContext:
    """Immutable, stateless stand-in used when telemetry is off."""

    def __call__(self, name: str, **metadata: Any) -> Self:  # noqa: ARG002
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        return None

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        pass

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        pass


class _EnabledTelemetryContext:
    """Telemetry context that forwards to reporters."""

    __slots__ = ("reporters",)

    def __init__(self, *reporters: TelemetryReporter):
        self.reporters = reporters

    def __call__(
        self, name: str, **metadata: Any
    ) -> AbstractContextManager["_EnabledTelemetryContext"]:
        return self._scope(name, **metadata)

    @contextmanager
    def _scope(self, name: str, **metadata: Any) -> Iterator["_EnabledTelemetryContext"]:
        if not name or not isinstance(name, str):
            raise ValueError("Scope name must be a non-empty string")

        stack = _scope_stack_var.get()
        scope_path = ".".join((*stack, name))
        token = _scope_stack_var.set((*stack, name))
        start = time.perf_counter()
        try:
            yield self
        finally:
            duration = time.perf_counter() - start
            _scope_stack_var.reset(token)
            parent = ".".join(stack) if stack else None
            for reporter in self.reporters:
                try:
                    reporter.record_timing(
                        scope_path, duration, depth=len(stack), parent_scope=parent, **metadata
                    )
                except Exception as e:
                    log.error(
                        "Telemetry reporter '%s' failed: %s",
                        type(reporter).__name__,
                        e,
                        exc_info=True,
                    )

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        """Record a metric under the current scope path."""
        stack = _scope_stack_var.get()
        scope_path = ".".join((*stack, name))
        for reporter in self.reporters:
            try:
                reporter.record_metric(scope_path, value, **metadata)
            except Exception as e:
                log.error(
                    "Telemetry reporter '%s' failed: %s",
                    type(reporter).__name__,
                    e,
                    exc_info=True,
                )

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        """Record a counter metric."""
        self.metric(name, increment, metric_type="counter", **metadata)


_NO_OP = _NoOpTelemetryContext()

TelemetryContextProtocol: TypeAlias = _EnabledTelemetryContext | _NoOpTelemetryContext


def TelemetryContext(*reporters: TelemetryReporter) -> TelemetryContextProtocol:  # noqa: N802
    """Return a telemetry context.

    Returns the shared no-op instance unless telemetry is enabled and at
    least one reporter is given.
    """
    if reporters and telemetry_enabled():
        return _EnabledTelemetryContext(*reporters)
    return _NO_OP


class LoggingReporter:
    """Writes timings and metrics to the ``fix_augment`` log at DEBUG."""

    def __init__(self, logger: logging.Logger | None = None):
        self._log = logger or log

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        self._log.debug("Performance: %s took %.2fms", scope, duration * 1000, extra=metadata)

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        self._log.debug("Metric: %s = %r", scope, value, extra=metadata)


class SimpleReporter:
    """In-memory reporter for development use; see :meth:`get_report`."""

    def __init__(self, max_entries_per_scope: int = 1000):
        self.max_entries = max_entries_per_scope
        self.timings: dict[str, deque[float]] = {}
        self.metrics: dict[str, deque[Any]] = {}

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:  # noqa: ARG002
        self.timings.setdefault(scope, deque(maxlen=self.max_entries)).append(duration)

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:  # noqa: ARG002
        self.metrics.setdefault(scope, deque(maxlen=self.max_entries)).append(value)

    def get_report(self) -> str:
        """Flat report of collected timings and metrics."""
        lines = ["=== Telemetry Report ===", "", "--- Timings ---"]
        for scope, durations in sorted(self.timings.items()):
            total = sum(durations)
            lines.append(
                f"{scope:<30} | Calls: {len(durations):<4} | "
                f"Avg: {total / len(durations):.4f}s | Total: {total:.4f}s"
            )
        if self.metrics:
            lines.extend(["", "--- Metrics ---"])
            for scope, values in sorted(self.metrics.items()):
                total = sum(v for v in values if isinstance(v, int | float))
                lines.append(f"{scope:<30} | Count: {len(values):<4} | Total: {total:,.0f}")
        return "\n".join(lines)
