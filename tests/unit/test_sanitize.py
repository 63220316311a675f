"""Unit tests for quote escaping, display escaping and path checks."""

import logging

import pytest

from fix_augment.exceptions import ValidationError
from fix_augment.sanitize import (
    escape_quotes,
    format_file_size,
    has_unescaped_quotes,
    sanitize_for_display,
    strip_markup,
    unescape_quotes,
    validate_path,
)


class TestEscapeQuotes:
    @pytest.mark.unit
    def test_escapes_bare_quotes(self):
        assert escape_quotes('Hello "world"') == 'Hello \\"world\\"'

    @pytest.mark.unit
    def test_leaves_escaped_quotes_alone(self):
        assert escape_quotes('say \\"hi\\"') == 'say \\"hi\\"'

    @pytest.mark.unit
    def test_mixed_quotes(self):
        assert escape_quotes('a "b" \\"c\\"') == 'a \\"b\\" \\"c\\"'

    @pytest.mark.unit
    def test_empty_input(self):
        assert escape_quotes("") == ""

    @pytest.mark.unit
    def test_rejects_non_string(self):
        with pytest.raises(ValidationError) as exc_info:
            escape_quotes(None)  # type: ignore[arg-type]
        assert exc_info.value.code == "INVALID_TEXT"


class TestUnescapeQuotes:
    @pytest.mark.unit
    def test_restores_escaped_quotes(self):
        assert unescape_quotes('Hello \\"world\\"') == 'Hello "world"'

    @pytest.mark.unit
    def test_reverses_escape(self):
        text = 'a "b" c'

        assert unescape_quotes(escape_quotes(text)) == text

    @pytest.mark.unit
    def test_plain_text_unchanged(self):
        assert unescape_quotes("no quotes here") == "no quotes here"


class TestHasUnescapedQuotes:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ('plain "quoted"', True),
            ('already \\"escaped\\"', False),
            ("no quotes at all", False),
            ("", False),
        ],
    )
    def test_detection(self, text, expected):
        assert has_unescaped_quotes(text) is expected


class TestDisplayHelpers:
    @pytest.mark.unit
    def test_sanitize_escapes_all_five_characters(self):
        assert (
            sanitize_for_display("<a href=\"x\">Tom & Jerry's</a>")
            == "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#x27;s&lt;/a&gt;"
        )

    @pytest.mark.unit
    def test_sanitize_does_not_double_escape_its_own_output(self):
        # & goes first, so '<' becomes '&lt;' and not '&amp;lt;'
        assert sanitize_for_display("<") == "&lt;"

    @pytest.mark.unit
    def test_strip_markup(self):
        assert strip_markup("<p>Hello <b>there</b></p>") == "Hello there"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("size", "expected"),
        [(0, "0 Bytes"), (512, "512 Bytes"), (1536, "1.5 KB"), (1048576, "1 MB")],
    )
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected


class TestValidatePath:
    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["src/app.py", "/abs/path/file.txt", "a.b.c"])
    def test_accepts_plain_paths(self, path):
        assert validate_path(path) is True

    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["../etc/passwd", "a/../b", "~/secrets", ""])
    def test_rejects_traversal_and_empty(self, path):
        assert validate_path(path) is False

    @pytest.mark.unit
    @pytest.mark.parametrize("path", [None, 42, ["a"]])
    def test_rejects_non_strings(self, path):
        assert validate_path(path) is False

    @pytest.mark.unit
    def test_logs_warning_on_traversal(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fix_augment.sanitize"):
            validate_path("../x")
        assert "path traversal" in caplog.text
