"""Application wiring for the haiku finder."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

from haiku_finder.core import (
    DICTIONARY_PATH_ENV,
    HaikuScanner,
    HyphenationDictionaryLoader,
    ScanReport,
    SyllableEstimator,
    load_cmu_syllables,
    read_tokens,
    tokenize,
)
from haiku_finder.utils.observability import get_logger
from haiku_finder.utils.telemetry import StructuredTelemetry, TelemetryLogger


class HaikuFinderApp:
    """High-level facade bundling the estimator, scanner and telemetry.

    The estimator (a new one unless ``estimator`` is supplied) is seeded from
    the hyphenation dictionary at ``dictionary_path`` (if given) and, with
    ``use_cmu``, from the CMU pronouncing dictionary. Seeding never replaces
    a count the estimator already holds, so entries of a supplied estimator
    win, and hyphenation entries take precedence over CMU entries.

    Without ``telemetry`` a new collector is created whose events are written
    to the project logger at DEBUG.
    """

    def __init__(
        self,
        estimator: Optional[SyllableEstimator] = None,
        *,
        dictionary_path: Optional[Path | str] = None,
        use_cmu: bool = False,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self._logger = get_logger(__name__).bind(component="app_facade")
        self.telemetry = telemetry or StructuredTelemetry(listeners=[TelemetryLogger()])
        self.dictionary_path = Path(dictionary_path) if dictionary_path else None

        self.estimator = estimator if estimator is not None else SyllableEstimator()
        with self.telemetry.timer("load_dictionary") as timing:
            timing["entries"] = self._seed_estimator(self.estimator, use_cmu=use_cmu)
        self.scanner = HaikuScanner(self.estimator)

        self._logger.info(
            "Haiku finder ready",
            context={
                "dictionary_path": str(self.dictionary_path) if self.dictionary_path else None,
                "use_cmu": use_cmu,
                "cached_words": len(self.estimator),
            },
        )

    def _seed_estimator(self, estimator: SyllableEstimator, *, use_cmu: bool) -> int:
        added = 0
        if self.dictionary_path is not None:
            loader = HyphenationDictionaryLoader(self.dictionary_path)
            added += estimator.seed(loader.entries())
        if use_cmu:
            added += estimator.seed(load_cmu_syllables())
        return added

    # Public API ------------------------------------------------------------
    def find_in_tokens(self, tokens: Sequence[str]) -> ScanReport:
        self.telemetry.start_run("scan")
        self.telemetry.annotate("tokens", len(tokens))
        with self.telemetry.timer("scan"):
            report = self.scanner.find_haikus(tokens)
        self.telemetry.increment("haikus", report.total)
        return report

    def find_in_text(self, text: str) -> ScanReport:
        return self.find_in_tokens(tokenize(text))

    def find_in_file(self, path: Path | str) -> ScanReport:
        """Scan a text file; an unreadable file is logged and scanned as empty."""

        return self.find_in_tokens(read_tokens(path))

    @staticmethod
    def render(report: ScanReport) -> str:
        """Render one line per haiku followed by the summary line."""

        return "".join(f"{line}\n" for line in report.lines())

    def create_gradio_interface(self):
        from haiku_finder.app.ui.gradio import create_interface

        return create_interface(self)


def _should_share_interface() -> bool:
    """Return whether the Gradio UI should request a public share link."""

    env_value = os.environ.get("HAIKU_SHARE", "")
    return env_value.strip().lower() in {"1", "true", "yes", "on"}


def main() -> None:
    """Launch the Gradio front-end."""

    from haiku_finder.utils.logging_config import configure_logging

    configure_logging()
    app = HaikuFinderApp(dictionary_path=os.environ.get(DICTIONARY_PATH_ENV))
    interface = app.create_gradio_interface()
    interface.launch(server_name="0.0.0.0", server_port=7860, share=_should_share_interface())


__all__ = ["HaikuFinderApp", "main"]
