"""Command-line entry point: print every haiku found in a text file."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from haiku_finder.app.app import HaikuFinderApp
from haiku_finder.core.dictionary_loader import DICTIONARY_PATH_ENV
from haiku_finder.utils.logging_config import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search a plain text file for runs of words that scan as a 5-7-5 haiku."
    )
    parser.add_argument("text", help="Path to the plain text file to scan.")
    parser.add_argument(
        "--dictionary",
        default=os.environ.get(DICTIONARY_PATH_ENV),
        help=(
            "Hyphenation dictionary of word=syl-la-ble lines used to seed syllable "
            f"counts (defaults to ${DICTIONARY_PATH_ENV})."
        ),
    )
    parser.add_argument(
        "--cmu",
        action="store_true",
        help="Also seed syllable counts from the CMU pronouncing dictionary.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for diagnostics on stderr (defaults to $HAIKU_LOG_LEVEL or INFO).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    app = HaikuFinderApp(dictionary_path=args.dictionary, use_cmu=args.cmu)
    report = app.find_in_file(args.text)
    sys.stdout.write(app.render(report))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
