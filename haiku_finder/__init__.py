"""Find haikus hiding in ordinary English prose."""

from .core import HaikuScanner, ScanReport, SyllableEstimator

__version__ = "0.1.0"

__all__ = ["HaikuScanner", "ScanReport", "SyllableEstimator", "__version__"]
