#!/usr/bin/env python3
"""Error types for MarkPrompter."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class LoadError(Exception):
    """A document could not be read or is not valid UTF-8 text."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigError(ValueError):
    """A theme or config file (or one of its entries) is malformed."""


class RangeError(ValueError):
    """A setting value cannot be clamped into its allowed range."""
