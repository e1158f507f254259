"""Gradio front-end for the haiku finder."""
