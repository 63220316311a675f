"""
Project-wide constants for the fix-augment text pipeline
"""  # noqa: D200, D212, D415

# ==============================================================================
# Input Limits
# ==============================================================================

MAX_SAFE_INPUT_SIZE = 8000  # characters
COMPLEXITY_THRESHOLD = 2000  # characters before complexity cues matter

# ==============================================================================
# Chunking Configuration
# ==============================================================================

MIN_CHUNK_SIZE = 1000  # characters
MAX_CHUNK_SIZE = 10_000  # characters
CONTEXT_OVERLAP_SIZE = 200  # trailing characters carried into the next chunk

# ==============================================================================
# Language Detection
# ==============================================================================

CONFIDENCE_PER_MATCH = 0.2
MIN_DETECTION_CONFIDENCE = 0.3  # winning score must exceed this

# ==============================================================================
# Session / Context Health
# ==============================================================================

CONTEXT_REFRESH_THRESHOLD = 10  # exchanges
CONTEXT_WARNING_RATIO = 0.7

# ==============================================================================
# Output Formatting
# ==============================================================================

OUTPUT_FORMATS = ("default", "enhanced", "markdown", "html")
DEFAULT_OUTPUT_FORMAT = "enhanced"
DEFAULT_SNIPPET_MODE = "EXCERPT"
DEFAULT_SNIPPET_PATH = "unknown"

# ==============================================================================
# Webview Message Whitelist
# ==============================================================================

ALLOWED_WEBVIEW_COMMANDS = frozenset(
    {
        "refreshDashboard",
        "checkContextHealth",
        "refreshContext",
        "validateFileContext",
        "optimizePrompt",
        "fixDoubleQuotes",
        "checkInputSize",
        "suggestBreakdown",
        "openSettings",
        "openDashboard",
        "closeWelcome",
    }
)

# ==============================================================================
# User-facing Messages
# ==============================================================================

UNESCAPED_QUOTES_WARNING = "Contains unescaped double quotes that may cause errors"
COMPLEX_TASK_WARNING = "Complex task detected - consider breaking down"
CONTEXT_REFRESH_SUGGESTION = (
    "Context is getting long. Consider refreshing for better results."
)
CONTEXT_REFRESHED = (
    "Context refreshed! Consider starting a new conversation for better results."
)
