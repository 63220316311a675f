"""Text analysis: size/complexity classification and language detection."""

from .classifier import SizeCheck, TextClassification, TextClassifier
from .language import NO_MATCH, LanguageDetector, LanguageMatch, detect_language

__all__ = [
    "NO_MATCH",
    "LanguageDetector",
    "LanguageMatch",
    "SizeCheck",
    "TextClassification",
    "TextClassifier",
    "detect_language",
]
