"""Escaping helpers for transport and display.

``escape_quotes`` prepares text for transports that choke on bare double
quotes; ``sanitize_for_display`` makes arbitrary text safe to embed in markup.
"""

import html
import logging
import re

from .exceptions import require_text

log = logging.getLogger(__name__)

# A double quote not already preceded by a backslash.
_UNESCAPED_QUOTE = re.compile(r'(?<!\\)"')
_MARKUP_TAG = re.compile(r"<[^>]*>")


def escape_quotes(text: str) -> str:
    """Backslash-escape every unescaped double quote.

    Idempotent: quotes that already carry a backslash are left alone, so a
    second pass is a no-op.
    """
    require_text(text)
    if not text:
        return text
    return _UNESCAPED_QUOTE.sub(r'\\"', text)


def unescape_quotes(text: str) -> str:
    """Reverse ``escape_quotes``: turn every ``\\"`` back into ``"``."""
    require_text(text)
    return text.replace('\\"', '"')


def has_unescaped_quotes(text: str) -> bool:
    """True if ``text`` holds a double quote without a preceding backslash."""
    require_text(text)
    return _UNESCAPED_QUOTE.search(text) is not None


def sanitize_for_display(text: str) -> str:
    """Escape ``& < > " '`` to entities (``&`` first, so nothing is double-escaped)."""
    require_text(text)
    return html.escape(text, quote=True)


def strip_markup(markup: str) -> str:
    """Remove anything that looks like a tag."""
    require_text(markup)
    return _MARKUP_TAG.sub("", markup)


def validate_path(path: object) -> bool:
    """Structural path check: rejects ``..`` segments and ``~`` shorthands.

    This does not touch the file system.
    """
    if not path or not isinstance(path, str):
        return False
    if ".." in path or "~" in path:
        log.warning("Potential path traversal detected: %r", path)
        return False
    return True


def format_file_size(size_bytes: int) -> str:
    """Human readable size, e.g. ``1.5 KB``."""
    if size_bytes <= 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB")
    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    rounded = round(value, 2)
    text = f"{rounded:.2f}".rstrip("0").rstrip(".")
    return f"{text} {units[unit]}"
