"""Windowed search for 5-7-5 syllable runs in a token sequence."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

from ..utils.observability import add_span_attributes, create_counter, get_logger, start_span
from .syllable_estimator import SyllableEstimator
from .tokens import is_word

LINE_LIMITS: Tuple[int, int, int] = (5, 7, 5)

_HAIKUS_FOUND = create_counter(
    "haiku_finder_haikus_found_total",
    "Haikus emitted by the scanner.",
)


class Fill(Enum):
    """Outcome of offering one word's syllables to a candidate window."""

    LINE1 = "line1"
    LINE2 = "line2"
    LINE3 = "line3"
    COMPLETE = "complete"
    OVERFLOW = "overflow"


@dataclass
class LineState:
    """Running syllable totals of the three lines of a candidate window."""

    line1: int = 0
    line2: int = 0
    line3: int = 0

    @property
    def complete(self) -> bool:
        return (self.line1, self.line2, self.line3) == LINE_LIMITS

    def fill(self, syllables: int) -> Fill:
        """Add ``syllables`` to the first line that can take them.

        Lines fill strictly left to right: line two only once line one holds
        exactly five syllables, line three only once line two holds seven. A
        word that fits nowhere either closes a complete window
        (:attr:`Fill.COMPLETE`) or abandons it (:attr:`Fill.OVERFLOW`); the
        state is left untouched in both cases.
        """

        limit1, limit2, limit3 = LINE_LIMITS
        if syllables + self.line1 <= limit1:
            self.line1 += syllables
            return Fill.LINE1
        if syllables + self.line2 <= limit2 and self.line1 == limit1:
            self.line2 += syllables
            return Fill.LINE2
        if syllables + self.line3 <= limit3 and self.line2 == limit2 and self.line1 == limit1:
            self.line3 += syllables
            return Fill.LINE3
        if self.complete:
            return Fill.COMPLETE
        return Fill.OVERFLOW


@dataclass(frozen=True)
class HaikuMatch:
    """Tokens ``start`` (inclusive) to ``end`` (exclusive) that form a haiku."""

    start: int
    end: int
    tokens: Tuple[str, ...]

    @property
    def text(self) -> str:
        """The tokens joined by single spaces, each followed by a space."""

        return "".join(f"{token} " for token in self.tokens)


@dataclass(frozen=True)
class ScanReport:
    matches: Tuple[HaikuMatch, ...]

    @property
    def total(self) -> int:
        return len(self.matches)

    @property
    def summary(self) -> str:
        return f"Found {self.total} haikus."

    def lines(self) -> Iterator[str]:
        for match in self.matches:
            yield match.text
        yield self.summary


class HaikuScanner:
    """Finds every token run whose syllables split into lines of 5, 7 and 5.

    Each word token with at most five syllables anchors a candidate window
    that grows one word at a time. A non-word token ends the window. A match
    is only recognised when the word *after* the third line overflows it, so
    a haiku ending exactly at the last token is not reported. Every token is
    tried as an anchor, so overlapping matches are all reported.
    """

    def __init__(self, estimator: SyllableEstimator) -> None:
        self.estimator = estimator
        self._logger = get_logger(__name__).bind(component="haiku_scanner")

    def _match_at(self, tokens: Sequence[str], start: int) -> HaikuMatch | None:
        first = self.estimator.count(tokens[start])
        if first > LINE_LIMITS[0]:
            return None

        state = LineState(line1=first)
        for index in range(start + 1, len(tokens)):
            token = tokens[index]
            if not is_word(token):
                return None
            outcome = state.fill(self.estimator.count(token))
            if outcome is Fill.COMPLETE:
                return HaikuMatch(start=start, end=index, tokens=tuple(tokens[start:index]))
            if outcome is Fill.OVERFLOW:
                return None
        return None

    def scan(self, tokens: Sequence[str]) -> Iterator[HaikuMatch]:
        """Yield matches lazily in order of their first token."""

        for start, token in enumerate(tokens):
            if not is_word(token):
                continue
            match = self._match_at(tokens, start)
            if match is None:
                continue
            _HAIKUS_FOUND.inc()
            self._logger.info(
                "Haiku found",
                context={"start": match.start, "end": match.end, "text": match.text.rstrip()},
            )
            yield match

    def find_haikus(self, tokens: Sequence[str]) -> ScanReport:
        """Scan ``tokens`` completely and return every match with the total."""

        with start_span("haiku_finder.scan", {"tokens": len(tokens)}) as span:
            matches: List[HaikuMatch] = list(self.scan(tokens))
            add_span_attributes(span, {"haikus": len(matches)})
        self._logger.info(
            "Scan complete",
            context={"tokens": len(tokens), "haikus": len(matches)},
        )
        return ScanReport(matches=tuple(matches))


__all__ = [
    "Fill",
    "HaikuMatch",
    "HaikuScanner",
    "LINE_LIMITS",
    "LineState",
    "ScanReport",
]
