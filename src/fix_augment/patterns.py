"""Read-only registry of detection patterns.

The catalog is built once at import time and never mutated afterwards. It
holds per-language detection expressions (declaration order is significant:
it breaks confidence ties during detection), complexity indicators used for
task-breakdown advice, and known assistant failure messages.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import dataclasses
import re
from types import MappingProxyType


def _compile_all(
    patterns: Mapping[str, str | re.Pattern[str]], flags: int = 0
) -> Mapping[str, re.Pattern[str]]:
    compiled = {
        name: p if isinstance(p, re.Pattern) else re.compile(p, flags)
        for name, p in patterns.items()
    }
    return MappingProxyType(compiled)


@dataclasses.dataclass(frozen=True, slots=True)
class PatternCatalog:
    """Immutable pattern tables shared by the classifier and detectors."""

    languages: Mapping[str, re.Pattern[str]]
    complexity_indicators: tuple[re.Pattern[str], ...]
    breakdown_cues: tuple[tuple[re.Pattern[str], str], ...]
    assistant_issues: Mapping[str, re.Pattern[str]]

    @classmethod
    def build(
        cls,
        *,
        languages: Mapping[str, str | re.Pattern[str]],
        complexity_indicators: Iterable[str | re.Pattern[str]] = (),
        breakdown_cues: Iterable[tuple[str | re.Pattern[str], str]] = (),
        assistant_issues: Mapping[str, str | re.Pattern[str]] | None = None,
    ) -> PatternCatalog:
        """Compile raw expressions into a frozen catalog.

        String expressions for complexity indicators, breakdown cues and
        assistant issues are compiled case-insensitively; language expressions
        are compiled as given (pass a compiled pattern to choose flags).
        """

        def _ci(p: str | re.Pattern[str]) -> re.Pattern[str]:
            return p if isinstance(p, re.Pattern) else re.compile(p, re.IGNORECASE)

        return cls(
            languages=_compile_all(languages),
            complexity_indicators=tuple(_ci(p) for p in complexity_indicators),
            breakdown_cues=tuple((_ci(p), advice) for p, advice in breakdown_cues),
            assistant_issues=_compile_all(assistant_issues or {}, re.IGNORECASE),
        )

    def language_names(self) -> tuple[str, ...]:
        """Language names in declaration order."""
        return tuple(self.languages)


LANGUAGE_PATTERNS: dict[str, str | re.Pattern[str]] = {
    "javascript": r"function|const|let|var|=>|import.*from",
    "typescript": r"""interface|type|enum|namespace|import.*from.*['"].*\.ts""",
    "python": r"def\s+\w+\s*\(|import\s+\w+|from\s+\w+\s+import|class\s+\w+:",
    "java": r"public\s+class|private\s+void|import\s+java\.",
    "csharp": r"using\s+System|namespace\s+\w+|public\s+class",
    "go": r"package\s+\w+|func\s+\w+|import\s+\(",
    "rust": r"fn\s+\w+|let\s+mut|use\s+std::",
    "cpp": r"#include\s*<|std::|cout|cin",
    "c": r"#include\s*<stdio\.h>|printf|scanf",
    "html": r"<html|<!DOCTYPE|<div|<span",
    "css": r"\{[^}]*:[^}]*\}|@media|@import",
    "json": r"\A\s*\{[\s\S]*\}\s*\Z",
    "yaml": re.compile(r"^[\w-]+:\s*[\w-]", re.MULTILINE),
    "markdown": re.compile(r"^#{1,6}\s+|\[.*\]\(.*\)|```", re.MULTILINE),
    "sql": re.compile(
        r"SELECT\s+.*\s+FROM|INSERT\s+INTO|UPDATE\s+.*\s+SET", re.IGNORECASE
    ),
    "shell": r"^#!/bin/(?:bash|sh)|echo\s+|export\s+",
}

COMPLEXITY_INDICATORS = (
    r"write.*documentation",
    r"create.*complete",
    r"implement.*entire",
    r"build.*full",
    r"generate.*all",
    r"refactor.*everything",
    r"migrate.*all",
)

BREAKDOWN_CUES = (
    (
        r"documentation|docs",
        "For documentation: Start with outline, then fill sections one by one",
    ),
    (r"refactor|migrate", "For refactoring: Tackle one module/file at a time"),
    (r"test|testing", "For testing: Write tests for one component/function at a time"),
)

ASSISTANT_ISSUE_PATTERNS = {
    "double_quote_error": r"We encountered an issue sending your message",
    "too_large_input": r"too large of an input",
    "credit_consumed_error": (
        r"I'm sorry\. I tried to call a tool, but provided too large of an input"
    ),
    "task_breakdown_needed": r"break.*down.*smaller.*tasks",
}

DEFAULT_CATALOG = PatternCatalog.build(
    languages=LANGUAGE_PATTERNS,
    complexity_indicators=COMPLEXITY_INDICATORS,
    breakdown_cues=BREAKDOWN_CUES,
    assistant_issues=ASSISTANT_ISSUE_PATTERNS,
)
