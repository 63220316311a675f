"""Unit tests for size and complexity classification."""

import pytest

from fix_augment.analysis import TextClassifier
from fix_augment.exceptions import ConfigurationError, ValidationError

COMPLEX_SENTENCE = "Write complete documentation for all modules with full examples"


@pytest.fixture
def classifier():
    return TextClassifier()


class TestCheckSize:
    @pytest.mark.unit
    def test_large_input_reports_counts(self, classifier):
        result = classifier.check_size("x" * 10_000, 8000)

        assert result.is_large is True
        assert result.recommended_chunks == 2
        assert "10000" in result.suggestion
        assert "8000" in result.suggestion
        assert "2 smaller tasks" in result.suggestion

    @pytest.mark.unit
    def test_boundary_is_not_large(self, classifier):
        result = classifier.check_size("x" * 8000, 8000)

        assert result.is_large is False
        assert result.suggestion is None
        assert result.recommended_chunks == 1

    @pytest.mark.unit
    @pytest.mark.parametrize("bad", [0, -5, 2.5, True, "100"])
    def test_rejects_bad_thresholds(self, classifier, bad):
        with pytest.raises(ConfigurationError):
            classifier.check_size("abc", bad)

    @pytest.mark.unit
    def test_rejects_non_string_text(self, classifier):
        with pytest.raises(ValidationError):
            classifier.check_size(b"bytes", 10)  # type: ignore[arg-type]


class TestDetectComplexity:
    @pytest.mark.unit
    def test_long_complex_text_gets_documentation_advice(self, classifier):
        text = " ".join([COMPLEX_SENTENCE] * 40)

        reason = classifier.detect_complexity(text, 2000)

        assert reason is not None
        assert reason.startswith("This looks like a complex task.")
        assert "For documentation: Start with outline" in reason
        assert "For refactoring" not in reason

    @pytest.mark.unit
    def test_short_complex_text_is_not_flagged(self, classifier):
        assert classifier.detect_complexity(COMPLEX_SENTENCE, 2000) is None

    @pytest.mark.unit
    def test_long_plain_text_is_not_flagged(self, classifier):
        assert classifier.detect_complexity("hello world " * 500, 2000) is None

    @pytest.mark.unit
    def test_secondary_cues_append_in_fixed_order(self, classifier):
        text = "Please refactor everything and add testing for the docs. " * 10

        reason = classifier.detect_complexity(text, 100)

        docs = reason.index("For documentation")
        refactor = reason.index("For refactoring")
        testing = reason.index("For testing")
        assert docs < refactor < testing


class TestClassify:
    @pytest.mark.unit
    def test_combines_both_views(self, classifier):
        text = " ".join([COMPLEX_SENTENCE] * 200)

        result = classifier.classify(text, max_safe_size=8000, complexity_threshold=2000)

        assert result.is_oversized is True
        assert result.size_chars == len(text)
        assert result.recommended_chunks == -(-len(text) // 8000)
        assert result.is_complex is True
        assert result.complexity_reason

    @pytest.mark.unit
    def test_simple_text(self, classifier):
        result = classifier.classify("short")

        assert result.is_oversized is False
        assert result.is_complex is False
        assert result.complexity_reason is None
