"""Core syllable estimation and haiku scanning for the haiku finder."""

from .dictionary_loader import (
    DICTIONARY_PATH_ENV,
    HyphenationDictionaryLoader,
    load_cmu_syllables,
    parse_hyphenation_line,
)
from .scanner import Fill, HaikuMatch, HaikuScanner, LineState, ScanReport
from .syllable_estimator import SyllableEstimator, heuristic_syllable_count
from .tokens import is_word, normalize_word, read_tokens, tokenize

__all__ = [
    "DICTIONARY_PATH_ENV",
    "Fill",
    "HaikuMatch",
    "HaikuScanner",
    "HyphenationDictionaryLoader",
    "LineState",
    "ScanReport",
    "SyllableEstimator",
    "heuristic_syllable_count",
    "is_word",
    "load_cmu_syllables",
    "normalize_word",
    "parse_hyphenation_line",
    "read_tokens",
    "tokenize",
]
