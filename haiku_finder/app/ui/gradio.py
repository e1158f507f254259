"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import gradio as gr

from haiku_finder.core import ScanReport

if TYPE_CHECKING:  # pragma: no cover
    from haiku_finder.app.app import HaikuFinderApp


def format_report_markdown(report: ScanReport) -> str:
    """Return a markdown rendering of ``report``."""

    if not report.matches:
        return f"_{report.summary}_"

    output: List[str] = []
    for number, match in enumerate(report.matches, start=1):
        output.append(f"{number}. {match.text.rstrip()} _(tokens {match.start}–{match.end - 1})_")
    output.append("")
    output.append(f"**{report.summary}**")
    return "\n".join(output)


def create_interface(app: "HaikuFinderApp") -> gr.Blocks:
    """Construct the Gradio Blocks UI."""

    def find_interface(text: str) -> str:
        if not text or not text.strip():
            return "Paste some prose on the left and click **Find haikus**."
        return format_report_markdown(app.find_in_text(text))

    with gr.Blocks(title="Haiku Finder") as interface:
        gr.Markdown("## Haiku Finder\nSearch prose for accidental 5-7-5 haikus.")
        with gr.Row():
            with gr.Column():
                text_input = gr.Textbox(
                    label="Text",
                    placeholder="Paste a passage of English prose",
                    lines=12,
                )
                find_btn = gr.Button("Find haikus", variant="primary")
            with gr.Column():
                results = gr.Markdown()

        find_btn.click(fn=find_interface, inputs=text_input, outputs=results)

    return interface


__all__ = ["create_interface", "format_report_markdown"]
