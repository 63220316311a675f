"""Post-processing of assistant replies for display.

``default`` returns the text untouched. ``enhanced`` and ``markdown`` normalize
code fences and reflow the known embedded tags. ``html`` does the same, then
renders to markup and highlights every tagged code block.
"""

from __future__ import annotations

import asyncio
import html
import logging
import re

from ..analysis.language import LanguageDetector
from ..constants import DEFAULT_SNIPPET_MODE, DEFAULT_SNIPPET_PATH, OUTPUT_FORMATS
from ..exceptions import ProcessingError, ValidationError, require_text
from ..telemetry import TelemetryContext, TelemetryContextProtocol
from .rendering import (
    CodeHighlighter,
    MarkdownRenderer,
    PygmentsHighlighter,
    PythonMarkdownRenderer,
)

log = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```([\w+#.-]*)[ \t]*\n?([\s\S]*?)```")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")
_FUNCTION_RESULTS = re.compile(r"<function_results>([\s\S]*?)</function_results>")
_CODE_SNIPPET = re.compile(
    r"<augment_code_snippet([^>]*)>([\s\S]*?)</augment_code_snippet>"
)
_PATH_ATTR = re.compile(r'path="([^"]*)"', re.IGNORECASE)
_MODE_ATTR = re.compile(r'mode="([^"]*)"', re.IGNORECASE)
_RENDERED_CODE = re.compile(
    r'<pre><code class="language-([\w+#.-]+)">([\s\S]*?)</code></pre>'
)
_LEADING_WHITESPACE = re.compile(r"^[ \t]+", re.MULTILINE)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _trim_blank_lines(code: str) -> str:
    return _LEADING_BLANK_LINES.sub("", code).rstrip()


class OutputFormatter:
    """Formats assistant replies; stateless apart from its collaborators."""

    def __init__(
        self,
        detector: LanguageDetector | None = None,
        renderer: MarkdownRenderer | None = None,
        highlighter: CodeHighlighter | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ):
        self.detector = detector or LanguageDetector()
        self.renderer = renderer or PythonMarkdownRenderer()
        self.highlighter = highlighter or PygmentsHighlighter()
        self._tele = telemetry or TelemetryContext()

    async def format_output(self, text: str, output_format: str = "enhanced") -> str:
        """Format ``text`` for display.

        Raises:
            ValidationError: ``text`` is not a string or the format is unknown.
            ProcessingError: A transform failed; no partial result is returned.
        """
        require_text(text)
        if output_format not in OUTPUT_FORMATS:
            raise ValidationError(
                f"Unknown output format {output_format!r}",
                code="INVALID_FORMAT",
                details={"format": output_format},
            )
        if not text or output_format == "default":
            return text

        with self._tele("format.output", format=output_format):
            try:
                if output_format == "html":
                    return await self.render_html(text)
                return self.enhance(text)
            except Exception as e:
                log.error("Format output failed (format=%s)", output_format, exc_info=True)
                raise ProcessingError(
                    "Failed to format output",
                    code="FORMAT_ERROR",
                    details={"format": output_format},
                ) from e

    def enhance(self, text: str) -> str:
        """Normalize fences, then reflow function results and code snippets."""
        enhanced = self.normalize_fences(text)
        enhanced = _FUNCTION_RESULTS.sub(self._reflow_function_results, enhanced)
        return _CODE_SNIPPET.sub(self._reflow_code_snippet, enhanced)

    def normalize_fences(self, text: str) -> str:
        """Tag untagged blocks with a detected language and trim blank edges."""

        def _normalize(match: re.Match[str]) -> str:
            language, code = match.group(1), _trim_blank_lines(match.group(2))
            if not language:
                language = self.detector.detect(code).language or ""
            return f"```{language}\n{code}\n```"

        return _FENCED_BLOCK.sub(_normalize, text)

    def optimize_code_blocks(self, text: str) -> str:
        """Fence normalization plus tab and blank-line cleanup inside code."""
        require_text(text)

        def _optimize(match: re.Match[str]) -> str:
            language, code = match.group(1), match.group(2).strip()
            if not language:
                language = self.detector.detect(code).language or ""
            code = _LEADING_WHITESPACE.sub(lambda m: m.group().replace("\t", "  "), code)
            code = _EXCESS_NEWLINES.sub("\n\n", code)
            return f"```{language}\n{code}\n```"

        return _FENCED_BLOCK.sub(_optimize, text)

    async def render_html(self, text: str) -> str:
        enhanced = self.enhance(text)
        rendered = await asyncio.to_thread(self.renderer.render, enhanced)
        return _RENDERED_CODE.sub(self._highlight_block, rendered)

    def _highlight_block(self, match: re.Match[str]) -> str:
        language = match.group(1)
        # the renderer already escaped the code; highlighters want it raw
        code = html.unescape(match.group(2))
        highlighted = self.highlighter.highlight(code, language)
        return f'<pre><code class="language-{language} highlight">{highlighted}</code></pre>'

    @staticmethod
    def _reflow_function_results(match: re.Match[str]) -> str:
        content = match.group(1).strip()
        return (
            "<details>\n<summary>Function Results</summary>\n\n"
            f"```\n{content}\n```\n</details>\n"
        )

    @staticmethod
    def _reflow_code_snippet(match: re.Match[str]) -> str:
        attrs, content = match.group(1), match.group(2).strip()
        path = _PATH_ATTR.search(attrs)
        mode = _MODE_ATTR.search(attrs)
        return (
            f'<augment_code_snippet path="{path.group(1) if path else DEFAULT_SNIPPET_PATH}" '
            f'mode="{mode.group(1) if mode else DEFAULT_SNIPPET_MODE}">\n'
            f"{content}\n</augment_code_snippet>"
        )
