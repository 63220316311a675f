"""Assistant reply processing: formatting, rendering and issue heuristics."""

from .formatter import OutputFormatter
from .issues import detect_assistant_issues, looks_like_assistant_output
from .rendering import (
    CodeHighlighter,
    MarkdownRenderer,
    PygmentsHighlighter,
    PythonMarkdownRenderer,
)

__all__ = [
    "CodeHighlighter",
    "MarkdownRenderer",
    "OutputFormatter",
    "PygmentsHighlighter",
    "PythonMarkdownRenderer",
    "detect_assistant_issues",
    "looks_like_assistant_output",
]
