"""Text integrity and chunking pipeline for size-constrained AI assistants."""

import importlib.metadata
import logging

from fix_augment.analysis import (
    LanguageDetector,
    LanguageMatch,
    TextClassification,
    TextClassifier,
    detect_language,
)
from fix_augment.chunking import (
    Chunker,
    ChunkMode,
    TextChunk,
    chunk,
    chunk_text,
    preserve_code_blocks,
    smart_chunk_text,
)
from fix_augment.config import FrozenConfig, ResolvedConfig, resolve_config
from fix_augment.exceptions import (
    AssistantAPIError,
    ConfigurationError,
    ErrorKind,
    FixAugmentError,
    ProcessingError,
    UIError,
    ValidationError,
)
from fix_augment.host import HostBridge, NotificationKind, TextPipeline
from fix_augment.patterns import DEFAULT_CATALOG, PatternCatalog
from fix_augment.response import OutputFormatter
from fix_augment.sanitize import (
    escape_quotes,
    has_unescaped_quotes,
    sanitize_for_display,
    unescape_quotes,
)
from fix_augment.session import SessionCounters
from fix_augment.telemetry import TelemetryContext, TelemetryReporter
from fix_augment.validation import (
    InputValidator,
    ValidationReport,
    validate_path,
    validate_webview_message,
)

# Version handling
try:
    __version__ = importlib.metadata.version("fix-augment")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Host facade
    "TextPipeline",
    "HostBridge",
    "NotificationKind",
    # Sanitizing and validation
    "escape_quotes",
    "unescape_quotes",
    "has_unescaped_quotes",
    "sanitize_for_display",
    "validate_path",
    "validate_webview_message",
    "InputValidator",
    "ValidationReport",
    # Analysis
    "TextClassifier",
    "TextClassification",
    "LanguageDetector",
    "LanguageMatch",
    "detect_language",
    "PatternCatalog",
    "DEFAULT_CATALOG",
    # Chunking
    "Chunker",
    "ChunkMode",
    "TextChunk",
    "chunk",
    "chunk_text",
    "smart_chunk_text",
    "preserve_code_blocks",
    # Output
    "OutputFormatter",
    # Session
    "SessionCounters",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    # Errors
    "FixAugmentError",
    "ErrorKind",
    "ValidationError",
    "ProcessingError",
    "ConfigurationError",
    "UIError",
    "AssistantAPIError",
]
