#!/usr/bin/env python3
"""Console messages and status text for MarkPrompter.

The CLI and the window both report through ``log``/``warn``/``die``;
the window's status bar text is built here so it can be checked
without a display.
"""
from __future__ import annotations

import math
import sys
import traceback

from .models import PlayerStatus


# ============================================================
# Console
# ============================================================

def log(msg: str, *, quiet: bool = False) -> None:
    """Informational line on stdout (file created, version banner)."""
    if not quiet:
        print(msg, flush=True)


def warn(msg: str, *, quiet: bool = False) -> None:
    """Recoverable problem on stderr: a skipped theme, an ignored setting."""
    if not quiet:
        print(f"WARNING: {msg}", file=sys.stderr, flush=True)


def die(msg: str, code: int = 1) -> int:
    """Report a fatal error and hand back ``code`` for ``main`` to return.

    Never silenced by ``--quiet``.
    """
    print(f"ERROR: {msg}", file=sys.stderr, flush=True)
    return code


def debug_traceback(enabled: bool) -> None:
    # called from an except block when --debug is set
    if enabled:
        traceback.print_exc()


# ============================================================
# Status Bar
# ============================================================

STATUS_LABELS = {
    PlayerStatus.STOPPED: "Stopped",
    PlayerStatus.PLAYING: "Playing",
    PlayerStatus.PAUSED_AT_HEADING: "Paused at heading",
    PlayerStatus.PAUSED_MANUAL: "Paused",
}


def format_duration(seconds: float) -> str:
    """Format reading time left as M:SS, or H:MM:SS past an hour.

    Partial seconds round up, so "0:00" only shows at the end of the
    document. NaN and negative values read as zero.
    """
    if not seconds or math.isnan(seconds) or seconds < 0:
        return "0:00"
    if math.isinf(seconds):
        return "--:--"
    total = math.ceil(seconds)
    h, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    if h:
        return f"{h:d}:{m:02d}:{s:02d}"
    return f"{m:d}:{s:02d}"


def status_line(status: PlayerStatus, remaining_seconds: float) -> str:
    return f"{STATUS_LABELS[status]} • {format_duration(remaining_seconds)} left"
