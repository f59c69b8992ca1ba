"""MarkPrompter - Auto-scrolling markdown teleprompter.

This package provides a markdown block parser, a frame-driven scroll
controller with heading pauses, theme handling, and a PyQt6 viewer.
"""
from .cli import main
from .models import TOOL_VERSION

__version__ = TOOL_VERSION
__all__ = ["main", "__version__"]
