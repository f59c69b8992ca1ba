#!/usr/bin/env python3
"""Configuration management for MarkPrompter.

This module handles startup settings: defaults, loading an optional JSON
config file, and merging overrides on top.
"""
from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError
from .models import PlaybackState


# ============================================================
# Settings
# ============================================================

@dataclass
class AppConfig:
    """Resolved startup settings.

    Playback values are clamped by the scroll controller when applied,
    so out-of-range numbers here are not an error.
    """
    # playback
    speed: float = 50.0
    font_size: float = 18.0
    pause_at_headings: bool = False
    pause_duration: float = 2.0
    auto_restart: bool = False

    # files
    themes_path: str = "themes.json"
    reload_interval: float = 1.0

    # rendering loop
    frame_interval_ms: int = 16

    def to_playback_state(self) -> PlaybackState:
        return PlaybackState(
            speed=float(self.speed),
            font_size=float(self.font_size),
            pause_at_headings=bool(self.pause_at_headings),
            pause_duration=float(self.pause_duration),
            auto_restart=bool(self.auto_restart),
        )


# ============================================================
# Configuration Loading
# ============================================================

def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path: Path to JSON config file, or None to skip loading

    Returns:
        Dictionary of configuration values, or empty dict if path is None

    Raises:
        ConfigError: If the file doesn't exist or isn't a JSON object
    """
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object at top-level.")
    return data


def _check_value(key: str, kind: str, value: Any) -> Any:
    # bool is a subclass of int, so it is rejected for numeric fields
    if kind == "bool":
        if not isinstance(value, bool):
            raise ConfigError(f"'{key}' must be true or false, got {value!r}")
        return value
    if kind == "str":
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' must be a string, got {value!r}")
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' must be a number, got {value!r}")
    if kind == "int":
        if isinstance(value, float):
            if not value.is_integer():
                raise ConfigError(f"'{key}' must be a whole number, got {value!r}")
            value = int(value)
        return value
    if not math.isfinite(value):
        raise ConfigError(f"'{key}' must be a finite number, got {value!r}")
    return float(value)


def apply_overrides(base: AppConfig, overrides: Dict[str, Any]) -> AppConfig:
    """Apply configuration overrides to a base configuration.

    Unknown keys and ``None`` values are ignored. Known keys must match
    the field type: ``"false"`` is not a bool and NaN is not a speed.

    Args:
        base: Base AppConfig instance
        overrides: Dictionary of configuration values to override

    Returns:
        New AppConfig instance with overrides applied

    Raises:
        ConfigError: If a value has the wrong type
    """
    kinds = {f.name: str(f.type) for f in dataclasses.fields(AppConfig)}
    d = dataclasses.asdict(base)
    for k, v in overrides.items():
        if k in d and v is not None:
            d[k] = _check_value(k, kinds[k], v)
    return AppConfig(**d)
