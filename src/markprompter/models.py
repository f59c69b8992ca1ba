#!/usr/bin/env python3
"""Data models for MarkPrompter.

This module contains the data classes shared across the application:
- TOOL_VERSION: Version constant
- Span / Block: Parsed markdown display units
- PlaybackState: Scroll controller state
- Theme / ThemeConfig: Color themes and the persisted selection
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


# ============================================================
# Versioning
# ============================================================

TOOL_VERSION = "0.2.0"


# ============================================================
# Value Ranges
# ============================================================

SPEED_MIN = 10.0
SPEED_MAX = 500.0
SPEED_STEP = 10.0

FONT_SIZE_MIN = 8.0
FONT_SIZE_MAX = 72.0
FONT_SIZE_STEP = 1.0

PAUSE_DURATION_MIN = 0.5
PAUSE_DURATION_MAX = 10.0


# ============================================================
# Document Structures
# ============================================================

class SpanStyle(Enum):
    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


class BlockKind(Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Span:
    """A styled run of text within a block.

    Attributes:
        text: Visible text, delimiters removed
        style: Inline style applied to the whole run
    """
    text: str
    style: SpanStyle = SpanStyle.PLAIN


@dataclass(frozen=True)
class Block:
    """One markdown display unit.

    Attributes:
        kind: Heading or paragraph
        level: Heading level 1-6, or 0 for paragraphs
        spans: Inline spans; concatenated they form the visible text
        index: Position among the parsed blocks, in source order
    """
    kind: BlockKind
    level: int
    spans: Tuple[Span, ...]
    index: int

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)

    @property
    def is_heading(self) -> bool:
        return self.kind is BlockKind.HEADING


# ============================================================
# Playback
# ============================================================

class PlayerStatus(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED_AT_HEADING = "paused_at_heading"
    PAUSED_MANUAL = "paused_manual"


@dataclass(frozen=True)
class PlaybackState:
    """Scroll playback state.

    Positions are vertical offsets in pixels, speed is in pixels per
    second. ``clock`` is the playback time accumulated by the controller
    and is the reference for ``pending_pause_until``.
    """
    position: float = 0.0
    speed: float = 50.0
    status: PlayerStatus = PlayerStatus.STOPPED

    # heading pause
    pause_at_headings: bool = False
    pause_duration: float = 2.0
    pending_pause_until: Optional[float] = None

    auto_restart: bool = False
    font_size: float = 18.0
    clock: float = 0.0

    @property
    def running(self) -> bool:
        """Playing, or held at a heading and about to resume on its own."""
        return self.status in (PlayerStatus.PLAYING, PlayerStatus.PAUSED_AT_HEADING)


# ============================================================
# Themes
# ============================================================

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Theme:
    """Color theme for the content view.

    Attributes:
        name: Display name, also the persisted selection key
        background_color: Panel background
        text_color: Paragraph text
        heading_colors: One color per heading level, H1 first
    """
    name: str
    background_color: RGB
    text_color: RGB
    heading_colors: Tuple[RGB, ...]

    def heading_color(self, level: int) -> RGB:
        """Return the color for a heading level, falling back to text color."""
        if 1 <= level <= len(self.heading_colors):
            return self.heading_colors[level - 1]
        return self.text_color


@dataclass
class ThemeConfig:
    """Themes loaded from disk plus the saved selection."""
    themes: List[Theme] = field(default_factory=list)
    selected_theme: Optional[str] = None
