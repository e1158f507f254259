"""Sources of known syllable counts used to seed a :class:`SyllableEstimator`."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pronouncing

from ..utils.observability import get_logger
from .tokens import is_word, normalize_word

DICTIONARY_PATH_ENV = "HAIKU_DICTIONARY_PATH"

_LOGGER = get_logger(__name__).bind(component="dictionary_loader")


def parse_hyphenation_line(line: str) -> Optional[Tuple[str, int]]:
    """Parse ``word=syl-la-ble`` into ``("word", 3)``.

    Returns ``None`` for blank, commented or malformed lines.
    """

    entry = line.strip()
    if not entry or entry.startswith("#") or "=" not in entry:
        return None

    raw_word, _, hyphenated = entry.partition("=")
    word = normalize_word(raw_word.strip())
    if not word:
        return None

    syllables = sum(1 for piece in hyphenated.strip().split("-") if piece)
    if syllables < 1:
        return None
    return word, syllables


class HyphenationDictionaryLoader:
    """Lazy loader for a ``word=syl-la-ble`` hyphenation dictionary file.

    A missing or unreadable file leaves the loader empty; the next access
    retries, so a dictionary that appears later is still picked up.
    """

    def __init__(self, dict_path: Optional[Path | str] = None) -> None:
        if dict_path is None:
            dict_path = os.environ.get(DICTIONARY_PATH_ENV) or "dictionary.txt"
        self.dict_path: Path = Path(dict_path)
        self._entries: Dict[str, int] = {}
        self._loaded: bool = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return

        entries: Dict[str, int] = {}
        skipped = 0
        try:
            with self.dict_path.open("r", encoding="utf-8") as handle:
                for line in handle:
                    parsed = parse_hyphenation_line(line)
                    if parsed is None:
                        skipped += 1
                        continue
                    word, syllables = parsed
                    entries[word] = syllables
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning(
                "Syllable dictionary unavailable; relying on heuristic counts",
                context={"path": str(self.dict_path), "error": str(exc)},
            )
            return

        self._entries = entries
        self._loaded = True
        _LOGGER.info(
            "Syllable dictionary loaded",
            context={"path": str(self.dict_path), "entries": len(entries), "skipped": skipped},
        )

    def entries(self) -> List[Tuple[str, int]]:
        self._ensure_loaded()
        return list(self._entries.items())


def load_cmu_syllables(words: Optional[Iterable[str]] = None) -> List[Tuple[str, int]]:
    """Return ``(word, syllables)`` pairs from the CMU pronouncing dictionary.

    Only the first pronunciation of each word is used. With ``words`` set,
    only those words are looked up; otherwise the whole dictionary is
    returned. Entries that are not purely alphabetic are dropped.
    """

    results: Dict[str, int] = {}

    if words is None:
        pronouncing.init_cmu()
        candidates = pronouncing.pronunciations
    else:
        candidates = []
        for word in words:
            normalized = normalize_word(word)
            phones = pronouncing.phones_for_word(normalized)
            if phones:
                candidates.append((normalized, phones[0]))

    for word, phones in candidates:
        if word in results or not is_word(word):
            continue
        syllables = pronouncing.syllable_count(phones)
        if syllables >= 1:
            results[word] = syllables

    _LOGGER.debug("CMU syllable counts prepared", context={"entries": len(results)})
    return list(results.items())


__all__ = [
    "DICTIONARY_PATH_ENV",
    "HyphenationDictionaryLoader",
    "load_cmu_syllables",
    "parse_hyphenation_line",
]
