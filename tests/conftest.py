import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from haiku_finder.core import SyllableEstimator

# "An old silent pond / A frog jumps into the pond / splash silence again"
# followed by one more word, which is what closes the match.
CLASSIC_SYLLABLES = {
    "an": 1,
    "old": 1,
    "silent": 2,
    "pond": 1,
    "a": 1,
    "frog": 1,
    "jumps": 1,
    "into": 2,
    "the": 1,
    "splash": 1,
    "silence": 2,
    "again": 2,
    "and": 1,
}

CLASSIC_TOKENS = [
    "an", "old", "silent", "pond",
    "a", "frog", "jumps", "into", "the", "pond",
    "splash", "silence", "again",
    "and",
]


@pytest.fixture
def classic_estimator() -> SyllableEstimator:
    """Estimator seeded so the classic haiku sums to exactly 5-7-5."""

    return SyllableEstimator(CLASSIC_SYLLABLES)


@pytest.fixture
def monosyllable_estimator() -> SyllableEstimator:
    """Estimator that knows every letter-named word below as one syllable."""

    words = "one two three four five six seven eight nine ten eleven twelve".split()
    words += "bee cee dee eff gee aitch eye jay kay ell em en oh pea cue".split()
    return SyllableEstimator({word: 1 for word in words})
