"""Heuristics over assistant replies."""

from __future__ import annotations

from ..exceptions import require_text
from ..patterns import DEFAULT_CATALOG, PatternCatalog

_ASSISTANT_MARKERS = (
    "```",
    "function_results",
    "<augment_code_snippet",
    "Agent:",
    "Next Edit:",
    "Instructions:",
    "Chat:",
)


def looks_like_assistant_output(text: str) -> bool:
    """True if ``text`` carries any marker typical of an assistant reply."""
    require_text(text)
    return any(marker in text for marker in _ASSISTANT_MARKERS)


def detect_assistant_issues(
    text: str, catalog: PatternCatalog = DEFAULT_CATALOG
) -> list[str]:
    """Names of the known failure messages found in ``text``, in catalog order."""
    require_text(text)
    return [name for name, pattern in catalog.assistant_issues.items() if pattern.search(text)]
