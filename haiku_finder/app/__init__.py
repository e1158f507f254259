"""Application layer: facade, command line and Gradio front-end."""

from .app import HaikuFinderApp

__all__ = ["HaikuFinderApp"]
