#!/usr/bin/env python3
"""Command-line interface for MarkPrompter.

This is the main entry point for the markprompter command. It resolves
settings (defaults -> config file -> CLI overrides), loads themes, and
either launches the GUI or runs one of the console-only actions.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, apply_overrides, load_config_file
from .document import is_markdown_file, load_document, outline
from .errors import ConfigError, LoadError
from .logging_utils import debug_traceback, die, log, warn
from .models import TOOL_VERSION, ThemeConfig
from .themes import load_themes, save_theme_preference, select_theme


# ============================================================
# Console Actions
# ============================================================

def print_themes(themes_path: str, *, quiet: bool) -> int:
    """List available themes, marking the selected one."""
    cfg = load_themes(themes_path, quiet=quiet)
    current = select_theme(cfg.themes, cfg.selected_theme)
    for t in cfg.themes:
        marker = "*" if t.name == current.name else " "
        print(f" {marker} {t.name}")
    return 0


def print_outline(path: Path) -> int:
    """Print the heading outline of a document."""
    try:
        blocks = load_document(path)
    except LoadError as e:
        return die(str(e), 1)
    headings = outline(blocks)
    if not headings:
        print("(no headings)")
    for level, text in headings:
        print(f"{'  ' * (level - 1)}- {text}")
    return 0


def launch_gui(cfg: AppConfig, theme_cfg: ThemeConfig, *, document: Optional[Path], quiet: bool) -> int:
    """Open the viewer window; Qt is imported only here."""
    from .app import run_gui

    return run_gui(cfg, theme_cfg, document=document, quiet=quiet)


# ============================================================
# CLI
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="MarkPrompter: auto-scrolling markdown teleprompter")
    ap.add_argument("file", nargs="?", default=None, help="Markdown file to open")

    ap.add_argument("--config", default=None, help="JSON config file. CLI args override config.")
    ap.add_argument(
        "--themes", default=None,
        help="JSON theme file (default: themes.json). Older themes.toml files are not read.",
    )
    ap.add_argument("--theme", default=None, help="Select (and remember) a theme by name")

    ap.add_argument("--speed", type=float, default=None, help="Scroll speed in px/s (10-500)")
    ap.add_argument("--font-size", type=float, default=None, help="Body font size in px (8-72)")
    ap.add_argument("--pause-at-headings", action=argparse.BooleanOptionalAction, default=None,
                    help="Pause when a heading reaches the top")
    ap.add_argument("--pause-duration", type=float, default=None, help="Heading pause in seconds (0.5-10)")
    ap.add_argument("--auto-restart", action=argparse.BooleanOptionalAction, default=None,
                    help="Start over after reaching the end")

    ap.add_argument("--list-themes", action="store_true", help="List themes and exit.")
    ap.add_argument("--outline", action="store_true", help="Print the heading outline of FILE and exit.")

    ap.add_argument("--quiet", action="store_true")
    ap.add_argument("--debug", action="store_true")
    ap.add_argument("--version", action="store_true")
    return ap


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Build settings: defaults -> config file -> CLI overrides.

    Raises:
        ConfigError: If --config points at a missing or malformed file,
            or a setting in it has the wrong type
    """
    cfg = apply_overrides(AppConfig(), load_config_file(args.config))
    cfg = apply_overrides(cfg, {
        "themes_path": args.themes,
        "speed": args.speed,
        "font_size": args.font_size,
        "pause_duration": args.pause_duration,
        "pause_at_headings": args.pause_at_headings,
        "auto_restart": args.auto_restart,
    })
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the markprompter command.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)

    if args.version:
        print(TOOL_VERSION)
        return 0

    quiet = args.quiet

    try:
        cfg = resolve_config(args)
    except ConfigError as e:
        debug_traceback(args.debug)
        return die(str(e), 2)

    if args.list_themes:
        return print_themes(cfg.themes_path, quiet=quiet)

    document = Path(args.file) if args.file else None
    if document is not None and not is_markdown_file(document):
        warn(f"{document} does not have a markdown extension", quiet=quiet)

    if args.outline:
        if document is None:
            return die("--outline requires a file.", 2)
        return print_outline(document)

    theme_cfg = load_themes(cfg.themes_path, quiet=quiet)
    if args.theme:
        chosen = select_theme(theme_cfg.themes, args.theme)
        if chosen.name != args.theme.strip():
            warn(f"Unknown theme '{args.theme}', using '{chosen.name}'", quiet=quiet)
        theme_cfg.selected_theme = chosen.name
        save_theme_preference(chosen.name, cfg.themes_path, quiet=quiet)

    log(f"MarkPrompter {TOOL_VERSION}", quiet=quiet)
    try:
        return launch_gui(cfg, theme_cfg, document=document, quiet=quiet)
    except KeyboardInterrupt:
        return die("Interrupted by user.", 130)


if __name__ == "__main__":
    raise SystemExit(main())
