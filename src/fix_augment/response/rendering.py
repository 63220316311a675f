"""Markdown rendering and syntax highlighting capabilities.

The formatter depends only on the two protocols below. The default
implementations wrap Python-Markdown and Pygments.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import markdown
from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from ..sanitize import sanitize_for_display

log = logging.getLogger(__name__)


@runtime_checkable
class MarkdownRenderer(Protocol):
    """Turns markdown into markup."""

    def render(self, text: str) -> str: ...  # noqa: D102


@runtime_checkable
class CodeHighlighter(Protocol):
    """Turns raw code into highlighted markup; must not raise."""

    def highlight(self, code: str, language: str | None = None) -> str: ...  # noqa: D102


class PythonMarkdownRenderer:
    """GitHub-flavoured-ish rendering: fenced code and hard line breaks."""

    def __init__(self, extensions: tuple[str, ...] = ("fenced_code", "nl2br", "tables")):
        self.extensions = list(extensions)

    def render(self, text: str) -> str:
        # Markdown instances keep per-document state; build one per call.
        return markdown.markdown(text, extensions=self.extensions, output_format="html")


class PygmentsHighlighter:
    """Highlight with the hinted lexer, else a guessed one, else escape."""

    def __init__(self, css_class: str = "highlight"):
        self._formatter = HtmlFormatter(nowrap=True, cssclass=css_class)

    def highlight(self, code: str, language: str | None = None) -> str:
        try:
            lexer = None
            if language:
                try:
                    lexer = get_lexer_by_name(language)
                except ClassNotFound:
                    log.debug("No lexer for %r, guessing", language)
            if lexer is None:
                lexer = guess_lexer(code)
            return pygments_highlight(code, lexer, self._formatter)
        except Exception:
            log.warning("Highlight failed, returning plain code (language=%r)", language)
            return sanitize_for_display(code)
