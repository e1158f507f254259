"""Syllable estimation backed by an optional dictionary and a spelling heuristic.

Lookups try the dictionary first (exact word, then ``-ed``/``-es`` and ``-s``
forms of a known root). Anything else is estimated from its spelling:

1. count the vowels ``a e i o u``;
2. add one when ``y`` is the only vowel-like letter or ends the word;
3. drop one for a silent trailing ``e``;
4. drop one for each diphthong and triphthong cluster removed from the word;
5. add one for a trailing ``le``/``les``.

Heuristic results are memoised. They are not clamped, so a word such as
``"cake"`` estimates to zero syllables and some pathological spellings go
negative.
"""

from __future__ import annotations

import re
import threading
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Pattern, Sequence, Set, Tuple, Union

from ..utils.observability import create_counter, get_logger
from .tokens import normalize_word

VOWELS = frozenset("aeiou")

DIPHTHONG_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"ea|ee",
        r"ai|ei|a[^aeiou]e",
        r"ou|oo|u[^aeiou]e",
        r"ay",
        r"igh|ie|[aeiou]y[aeiou]",
        r"oi|oy",
        r"ai|ei|a[^aeiou]e",
        r"ou",
    )
)

TRIPHTHONG_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(pattern) for pattern in (r"aye", r"i[^aeiou]e", r"oya", r"ay", r"owe")
)

_TRAILING_LE_PATTERN = re.compile(r"[a-z]+les?")

SyllableSeed = Union[Mapping[str, int], Iterable[Tuple[str, int]]]

_LOOKUPS = create_counter(
    "haiku_finder_syllable_lookups_total",
    "Syllable counts resolved, by resolution source.",
    ("source",),
)


def remove_first_match(word: str, pattern: Pattern[str]) -> Tuple[str, bool]:
    """Return ``word`` without the first match of ``pattern`` and whether one was found."""

    match = pattern.search(word)
    if match is None:
        return word, False
    return word[: match.start()] + word[match.end() :], True


def reduce_clusters(word: str, patterns: Sequence[Pattern[str]]) -> Tuple[str, int]:
    """Apply ``patterns`` in order, each removing at most one match.

    Every pass sees the string left behind by the previous one. Returns the
    reduced string and the number of passes that removed something.
    """

    removed = 0
    for pattern in patterns:
        word, found = remove_first_match(word, pattern)
        if found:
            removed += 1
    return word, removed


def heuristic_syllable_count(word: str) -> int:
    """Estimate syllables of an already normalized ``word`` from its spelling."""

    count = sum(1 for letter in word if letter in VOWELS)

    if (count == 0 and "y" in word) or word.endswith("y"):
        count += 1
    if word.endswith("e") and count != 0:
        count -= 1

    working, diphthongs = reduce_clusters(word, DIPHTHONG_PATTERNS)
    _, triphthongs = reduce_clusters(working, TRIPHTHONG_PATTERNS)
    count -= diphthongs + triphthongs

    if _TRAILING_LE_PATTERN.fullmatch(word):
        count += 1
    return count


class SyllableEstimator:
    """Counts syllables per token, caching every heuristic estimate.

    ``dictionary`` seeds the cache with known counts, either as a mapping or
    as ``(word, count)`` pairs. Cached values never change for the lifetime of
    the estimator. The cache is guarded by a lock so a single estimator can be
    shared between threads scanning different texts.
    """

    def __init__(self, dictionary: Optional[SyllableSeed] = None) -> None:
        self._cache: Dict[str, int] = {}
        self._seeded: Set[str] = set()
        self._lock = threading.RLock()
        self._logger = get_logger(__name__).bind(component="syllable_estimator")
        if dictionary is not None:
            self.seed(dictionary)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._cache

    @property
    def cache(self) -> Mapping[str, int]:
        """Read-only view of the word to syllable count cache."""

        return MappingProxyType(self._cache)

    @staticmethod
    def _validate_entry(entry: object) -> Optional[Tuple[str, int]]:
        try:
            word, count = entry  # type: ignore[misc]
        except (TypeError, ValueError):
            return None
        if not isinstance(word, str) or isinstance(count, bool) or not isinstance(count, int):
            return None
        if count < 1:
            return None
        return word, count

    def seed(self, dictionary: SyllableSeed) -> int:
        """Add known counts to the cache without replacing existing entries.

        Entries that are not a ``(word, count)`` pair with an integer count of
        at least one are logged and skipped; those words fall back to the
        heuristic. Returns the number of new entries.
        """

        pairs = dictionary.items() if isinstance(dictionary, Mapping) else dictionary
        added = 0
        with self._lock:
            for entry in pairs:
                validated = self._validate_entry(entry)
                if validated is None:
                    self._logger.warning(
                        "Skipping malformed dictionary entry",
                        context={"entry": repr(entry)},
                    )
                    continue
                word, count = validated
                key = normalize_word(word)
                if not key or key in self._cache:
                    continue
                self._cache[key] = count
                self._seeded.add(key)
                added += 1
        self._logger.debug(
            "Seeded syllable cache",
            context={"added": added, "size": len(self._cache)},
        )
        return added

    def cached_count(self, word: str) -> Optional[int]:
        return self._cache.get(normalize_word(word))

    def count(self, token: str) -> int:
        """Return the syllable count for ``token``."""

        word = normalize_word(token)

        known = self._cache.get(word)
        if known is not None:
            _LOOKUPS.labels(source="dictionary" if word in self._seeded else "cache").inc()
            return known

        if len(word) >= 2:
            root = self._cache.get(word[:-2])
            if root is not None:
                if word.endswith("ed"):
                    _LOOKUPS.labels(source="inflection").inc()
                    return root
                if word.endswith("es"):
                    _LOOKUPS.labels(source="inflection").inc()
                    return root + 1

        singular = self._cache.get(word[:-1])
        if singular is not None and word.endswith("s"):
            _LOOKUPS.labels(source="plural").inc()
            return singular

        estimate = heuristic_syllable_count(word)
        with self._lock:
            stored = self._cache.setdefault(word, estimate)
        _LOOKUPS.labels(source="heuristic").inc()
        self._logger.debug(
            "Estimated syllables",
            context={"word": word, "syllables": stored},
        )
        return stored


__all__ = [
    "DIPHTHONG_PATTERNS",
    "TRIPHTHONG_PATTERNS",
    "SyllableEstimator",
    "SyllableSeed",
    "heuristic_syllable_count",
    "reduce_clusters",
    "remove_first_match",
]
