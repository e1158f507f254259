"""Token helpers: splitting source text and classifying tokens as words."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

from ..utils.observability import get_logger

PUNCTUATION_CHARACTERS = "!.?,:;\"'"

_WORD_PATTERN = re.compile(r"[a-zA-Z]+")
_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
_PUNCTUATION_TABLE = str.maketrans("", "", PUNCTUATION_CHARACTERS)

_LOGGER = get_logger(__name__).bind(component="tokens")


def is_word(token: str) -> bool:
    """Return ``True`` when ``token`` consists solely of ASCII letters."""

    return _WORD_PATTERN.fullmatch(token) is not None


def normalize_word(token: str) -> str:
    """Lowercase ``token`` and strip the punctuation set ``! . ? , : ; " '``."""

    return token.lower().translate(_PUNCTUATION_TABLE)


def tokenize_lines(lines: Iterable[str]) -> List[str]:
    tokens: List[str] = []
    for line in lines:
        tokens.extend(piece for piece in line.rstrip("\r\n").split(" ") if piece)
    return tokens


def tokenize(text: str) -> List[str]:
    """Split ``text`` on literal spaces, line by line, dropping empty pieces.

    Only ``\\n``, ``\\r`` and ``\\r\\n`` end a line, matching how text files are
    read, so form feeds and Unicode separators stay inside their token.

    Punctuation, tabs and digits stay attached to the token they appear in, so
    ``"pond,"`` and ``"3rd"`` survive as tokens (and are later rejected by
    :func:`is_word`).
    """

    return tokenize_lines(_LINE_BREAK_PATTERN.split(text))


def read_tokens(path: Path | str) -> List[str]:
    """Read and tokenize a UTF-8 text file.

    A file that cannot be opened or decoded is logged and treated as empty.
    """

    text_path = Path(path)
    try:
        with text_path.open("r", encoding="utf-8") as handle:
            return tokenize_lines(handle)
    except (OSError, UnicodeDecodeError) as exc:
        _LOGGER.error(
            "Text source unavailable",
            context={"path": str(text_path), "error": str(exc)},
        )
        return []


__all__ = [
    "PUNCTUATION_CHARACTERS",
    "is_word",
    "normalize_word",
    "read_tokens",
    "tokenize",
    "tokenize_lines",
]
