#!/usr/bin/env python3
"""Theme management for MarkPrompter.

This module handles the built-in theme set, loading themes from the JSON
theme file, and persisting the selected theme name.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ConfigError
from .logging_utils import log, warn
from .models import RGB, Theme, ThemeConfig


DEFAULT_THEMES_PATH = Path("themes.json")


# ============================================================
# Built-in Themes
# ============================================================

def _theme(name: str, bg: RGB, text: RGB, *headings: RGB) -> Theme:
    return Theme(name=name, background_color=bg, text_color=text, heading_colors=tuple(headings))


DEFAULT_THEMES: List[Theme] = [
    _theme(
        "Light", (240, 240, 245), (60, 60, 70),
        (100, 100, 180), (90, 90, 170), (80, 80, 160),
        (70, 70, 150), (60, 60, 140), (50, 50, 130),
    ),
    _theme(
        "Dark", (40, 44, 52), (220, 223, 228),
        (255, 180, 100), (230, 160, 90), (210, 140, 80),
        (190, 120, 70), (170, 100, 60), (150, 80, 50),
    ),
    _theme(
        "Solarized", (0, 43, 54), (131, 148, 150),
        (181, 137, 0), (203, 75, 22), (220, 50, 47),
        (211, 54, 130), (108, 113, 196), (38, 139, 210),
    ),
    _theme(
        "After Dark", (32, 29, 101), (172, 171, 213),
        (254, 243, 199), (123, 121, 181), (172, 171, 213),
        (125, 211, 252), (167, 243, 208), (254, 240, 138),
    ),
    _theme(
        "Her", (101, 29, 29), (213, 171, 171),
        (254, 243, 199), (181, 121, 121), (213, 171, 171),
        (125, 211, 252), (167, 243, 208), (254, 240, 138),
    ),
    _theme(
        "Forest", (5, 46, 22), (134, 239, 172),
        (254, 243, 199), (74, 222, 128), (134, 239, 172),
        (125, 211, 252), (167, 243, 208), (254, 240, 138),
    ),
    _theme(
        "Sky", (8, 47, 73), (125, 211, 252),
        (254, 243, 199), (56, 189, 248), (125, 211, 252),
        (167, 243, 208), (254, 240, 138), (252, 165, 165),
    ),
    _theme(
        "Clays", (69, 26, 3), (245, 158, 11),
        (254, 243, 199), (217, 119, 6), (245, 158, 11),
        (125, 211, 252), (167, 243, 208), (254, 240, 138),
    ),
    _theme(
        "Stones", (41, 37, 36), (156, 163, 175),
        (254, 243, 199), (107, 114, 128), (156, 163, 175),
        (125, 211, 252), (167, 243, 208), (254, 240, 138),
    ),
]


# ============================================================
# (De)serialization
# ============================================================

def _parse_rgb(value: Any, what: str) -> RGB:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"{what} must be a list of three integers")
    out = []
    for c in value:
        if isinstance(c, bool) or not isinstance(c, int) or not 0 <= c <= 255:
            raise ConfigError(f"{what} components must be integers in 0..255")
        out.append(c)
    return (out[0], out[1], out[2])


def theme_from_dict(data: Any) -> Theme:
    """Build a Theme from a decoded JSON object.

    Args:
        data: Mapping with name, background_color, text_color, heading_colors

    Returns:
        The validated Theme

    Raises:
        ConfigError: If a field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ConfigError("Theme entry must be an object")
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError("Theme entry needs a non-empty name")
    name = name.strip()

    headings = data.get("heading_colors")
    if not isinstance(headings, list) or not 1 <= len(headings) <= 6:
        raise ConfigError(f"Theme '{name}': heading_colors must list 1 to 6 colors")

    return Theme(
        name=name,
        background_color=_parse_rgb(data.get("background_color"), f"Theme '{name}' background_color"),
        text_color=_parse_rgb(data.get("text_color"), f"Theme '{name}' text_color"),
        heading_colors=tuple(
            _parse_rgb(c, f"Theme '{name}' heading_colors[{i}]") for i, c in enumerate(headings)
        ),
    )


def theme_to_dict(theme: Theme) -> Dict[str, Any]:
    return {
        "name": theme.name,
        "background_color": list(theme.background_color),
        "text_color": list(theme.text_color),
        "heading_colors": [list(c) for c in theme.heading_colors],
    }


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read theme file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Theme file {path} must contain a JSON object")
    return data


def write_theme_file(path: Union[str, Path], cfg: ThemeConfig) -> None:
    """Write themes and the selection to ``path`` atomically.

    Raises:
        OSError: If the file can't be written
    """
    _write_json(Path(path), {
        "selected_theme": cfg.selected_theme,
        "themes": [theme_to_dict(t) for t in cfg.themes],
    })


def _write_json(p: Path, payload: Dict[str, Any]) -> None:
    if p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    os.replace(tmp, p)


# ============================================================
# Loading / Saving
# ============================================================

def load_themes(
    path: Union[str, Path, None] = None,
    *,
    create_missing: bool = True,
    quiet: bool = False,
) -> ThemeConfig:
    """Load themes and the saved selection.

    A missing file yields the built-in themes (and is created with them
    when ``create_missing`` is set). Malformed entries are skipped one by
    one; if none survive, the built-in themes are used. This function
    never raises for bad theme data.

    Args:
        path: Theme file path (defaults to themes.json)
        create_missing: Write the built-in themes when the file is absent
        quiet: Suppress informational output and warnings

    Returns:
        ThemeConfig with at least one theme
    """
    p = Path(path) if path else DEFAULT_THEMES_PATH
    defaults = ThemeConfig(themes=list(DEFAULT_THEMES), selected_theme=None)

    if not p.exists():
        if create_missing:
            try:
                write_theme_file(p, defaults)
                log(f"Created theme file: {p}", quiet=quiet)
            except OSError as e:
                warn(f"Could not create theme file {p}: {e}", quiet=quiet)
        return defaults

    try:
        data = _read_config(p)
    except ConfigError as e:
        warn(f"{e}; using built-in themes", quiet=quiet)
        return defaults

    entries = data.get("themes")
    if not isinstance(entries, list):
        warn(f"Theme file {p} has no 'themes' list; using built-in themes", quiet=quiet)
        return defaults

    themes: List[Theme] = []
    for i, entry in enumerate(entries):
        try:
            themes.append(theme_from_dict(entry))
        except ConfigError as e:
            warn(f"Skipping theme #{i + 1}: {e}", quiet=quiet)

    if not themes:
        warn(f"No valid themes in {p}; using built-in themes", quiet=quiet)
        themes = list(DEFAULT_THEMES)

    selected = data.get("selected_theme")
    if not isinstance(selected, str):
        selected = None
    return ThemeConfig(themes=themes, selected_theme=selected.strip() if selected else None)


def select_theme(themes: List[Theme], name: Optional[str]) -> Theme:
    """Return the theme called ``name``, or the first theme.

    Falls back to the first built-in theme when ``themes`` is empty.
    """
    pool = themes or DEFAULT_THEMES
    if name:
        for t in pool:
            if t.name == name.strip():
                return t
    return pool[0]


def save_theme_preference(
    name: str,
    path: Union[str, Path, None] = None,
    *,
    quiet: bool = False,
) -> bool:
    """Persist the selected theme name, keeping the rest of the file intact.

    Only ``selected_theme`` is rewritten; theme entries (including ones
    that failed to load) and unknown keys are kept as they are. A file
    that can't be parsed is left alone so hand edits are not lost.

    Returns:
        True if the file was written, False otherwise (warned)
    """
    p = Path(path) if path else DEFAULT_THEMES_PATH
    if p.exists():
        try:
            data = _read_config(p)
        except ConfigError as e:
            warn(f"Not saving theme preference: {e}", quiet=quiet)
            return False
    else:
        data = {"themes": [theme_to_dict(t) for t in DEFAULT_THEMES]}
    data["selected_theme"] = name
    try:
        _write_json(p, data)
    except OSError as e:
        warn(f"Failed to save theme preference: {e}", quiet=quiet)
        return False
    return True
