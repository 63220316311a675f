"""Host-facing facade.

A host (editor extension, CLI, test harness) implements :class:`HostBridge`
and drives a :class:`TextPipeline`. The pipeline is the only place where
errors are caught and turned into notifications; everything below it raises.
"""

from __future__ import annotations

from collections.abc import Callable
import enum
import logging
from typing import Any, Protocol, TypeVar, runtime_checkable

from .analysis.language import LanguageDetector, LanguageMatch
from .chunking.chunker import Chunker
from .chunking.types import ChunkMode, TextChunk
from .config.resolver import validate_values
from .config.schema import FixAugmentSettings
from .config.types import FrozenConfig
from .constants import CONTEXT_REFRESH_SUGGESTION, CONTEXT_REFRESHED
from .exceptions import guard, require_text
from .response.formatter import OutputFormatter
from .response.issues import detect_assistant_issues, looks_like_assistant_output
from .sanitize import escape_quotes
from .session import SessionCounters
from .telemetry import LoggingReporter, TelemetryContext, TelemetryContextProtocol
from .validation import InputValidator, ValidationReport

log = logging.getLogger(__name__)

T = TypeVar("T")


class NotificationKind(enum.StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@runtime_checkable
class HostBridge(Protocol):
    """The three things the pipeline needs from its host."""

    def get_config(self, key: str, default: Any = None) -> Any: ...  # noqa: D102
    def get_active_text(self) -> str: ...  # noqa: D102
    def notify(self, message: str, kind: NotificationKind) -> None: ...  # noqa: D102


def config_from_host(host: HostBridge) -> FrozenConfig:
    """Read every setting through ``host.get_config`` and validate the result."""
    values = {
        name: host.get_config(name, default)
        for name, default in FixAugmentSettings.default_values().items()
    }
    return FrozenConfig(**validate_values(values))


class TextPipeline:
    """All host operations over one configuration and one session."""

    def __init__(
        self,
        host: HostBridge | None = None,
        config: FrozenConfig | None = None,
        *,
        session: SessionCounters | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ):
        if config is None:
            if host is not None:
                config = config_from_host(host)
            else:
                from .config.api import resolve_config

                config = resolve_config().to_frozen()
        self.host = host
        self.config = config
        self.session = session or SessionCounters()
        self._tele = telemetry or TelemetryContext(LoggingReporter())

        self.validator = InputValidator.from_config(config, telemetry=self._tele)
        self.chunker = Chunker.from_config(config, telemetry=self._tele)
        self.detector = LanguageDetector()
        self.formatter = OutputFormatter(detector=self.detector, telemetry=self._tele)
        self._refresh_suggested = False

    # --- Core operations ---

    def validate(self, text: str) -> ValidationReport:
        return self.validator.validate(text)

    def escape_quotes(self, text: str) -> str:
        return escape_quotes(text)

    def chunk(
        self,
        text: str,
        max_size: int | None = None,
        mode: ChunkMode | str | None = None,
    ) -> list[TextChunk]:
        """Chunk with the configured mode; ``max_size`` defaults to the safe input size."""
        return self.chunker.chunk(
            text,
            self.config.max_safe_input_size if max_size is None else max_size,
            self.config.chunk_mode if mode is None else mode,
        )

    def detect_language(self, code: str) -> LanguageMatch:
        return self.detector.detect(code)

    async def format_output(self, text: str, output_format: str | None = None) -> str:
        if not self.config.enabled:
            return require_text(text)
        return await self.formatter.format_output(
            text, self.config.output_format if output_format is None else output_format
        )

    def prepare_for_submission(self, text: str) -> list[TextChunk]:
        """Escape (when enabled) and chunk ``text`` ready to send."""
        require_text(text)
        if not self.config.enabled:
            return self.chunker.chunk(text, max(len(text), 1), ChunkMode.NAIVE)
        if self.config.auto_fix_double_quotes:
            text = escape_quotes(text)
        return self.chunk(text)

    # --- Host flows ---

    def validate_active_text(self) -> ValidationReport:
        """Validate the host's current text and notify every warning."""
        report = self.validate(self._require_host().get_active_text())
        if report.is_valid:
            self._notify("Input looks good", NotificationKind.INFO)
        for warning in report.warnings:
            self._notify(warning, NotificationKind.WARNING)
        return report

    def observe_reply(self, text: str) -> bool:
        """Count ``text`` as an exchange if it looks like an assistant reply.

        Suggests a context refresh once per refresh cycle when the exchange
        count reaches the configured threshold. Returns True if counted.
        """
        if not (self.config.enabled and self.config.context_health_monitoring):
            return False
        if not looks_like_assistant_output(text):
            return False

        self.session.increment_exchange_count()
        for issue in detect_assistant_issues(text):
            log.info("Assistant reply shows known issue: %s", issue)

        threshold = self.config.context_refresh_threshold
        if self.session.should_refresh_context(threshold) and not self._refresh_suggested:
            self._refresh_suggested = True
            self._notify(CONTEXT_REFRESH_SUGGESTION, NotificationKind.WARNING)
        return True

    def refresh_context(self) -> None:
        self.session.reset_exchange_count()
        self._refresh_suggested = False
        self._notify(CONTEXT_REFRESHED, NotificationKind.INFO)

    def run_command(self, name: str, fn: Callable[[], T]) -> T | None:
        """Command boundary: run ``fn``, and on failure log and notify once."""
        return guard(
            fn,
            context=name,
            on_error=lambda message: self._notify(message, NotificationKind.ERROR),
        )

    # --- Helpers ---

    def _require_host(self) -> HostBridge:
        if self.host is None:
            raise RuntimeError("This operation needs a host")
        return self.host

    def _notify(self, message: str, kind: NotificationKind) -> None:
        if self.host is None:
            log.info("[%s] %s", kind.value, message)
            return
        self.host.notify(message, kind)
