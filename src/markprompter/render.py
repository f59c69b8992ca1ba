#!/usr/bin/env python3
"""Rich-text rendering helpers for the content view.

Pure functions mapping blocks, themes and font sizes to the HTML subset
understood by Qt labels. Layout and measurement stay in the GUI.
"""
from __future__ import annotations

import html
from typing import List

from .models import RGB, Block, Span, SpanStyle, Theme


# Size multipliers for H1..H6 relative to the body font
HEADING_SCALE = (2.0, 1.8, 1.6, 1.4, 1.2, 1.1)

ITALIC_SCALE = 0.95
ITALIC_DIM = 0.9
CODE_SCALE = 0.9
CODE_BACKGROUND = "rgba(80, 80, 80, 40)"
MONOSPACE_FAMILY = "monospace"


# ============================================================
# Colors / Sizes
# ============================================================

def rgb_hex(rgb: RGB) -> str:
    """Format an RGB triple as ``#rrggbb``."""
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def dim(rgb: RGB, factor: float = ITALIC_DIM) -> RGB:
    r, g, b = rgb
    return (int(r * factor), int(g * factor), int(b * factor))


def heading_font_size(level: int, base_size: float) -> float:
    """Scale the body font size for a heading level (1-6)."""
    if 1 <= level <= len(HEADING_SCALE):
        return base_size * HEADING_SCALE[level - 1]
    return base_size


def block_font_size(block: Block, base_size: float) -> float:
    return heading_font_size(block.level, base_size) if block.is_heading else base_size


def block_color(block: Block, theme: Theme) -> RGB:
    return theme.heading_color(block.level) if block.is_heading else theme.text_color


# ============================================================
# HTML
# ============================================================

def span_to_html(span: Span, color: RGB, size: float) -> str:
    """Render one span as an HTML fragment."""
    text = html.escape(span.text, quote=False)
    if span.style is SpanStyle.BOLD:
        return f"<b>{text}</b>"
    if span.style is SpanStyle.ITALIC:
        return (
            f'<i style="color:{rgb_hex(dim(color))}; '
            f'font-size:{size * ITALIC_SCALE:.1f}px">{text}</i>'
        )
    if span.style is SpanStyle.CODE:
        return (
            f'<span style="font-family:{MONOSPACE_FAMILY}; '
            f'font-size:{size * CODE_SCALE:.1f}px; '
            f'background-color:{CODE_BACKGROUND}">{text}</span>'
        )
    return text


def block_to_html(block: Block, theme: Theme, font_size: float) -> str:
    """Render a block with its theme color and scaled font size.

    Args:
        block: Parsed block
        theme: Active theme
        font_size: Body font size in pixels

    Returns:
        HTML fragment for a single rich-text label
    """
    size = block_font_size(block, font_size)
    color = block_color(block, theme)
    parts: List[str] = [span_to_html(s, color, size) for s in block.spans]
    weight = "bold" if block.is_heading else "normal"
    return (
        f'<span style="color:{rgb_hex(color)}; font-size:{size:.1f}px; '
        f'font-weight:{weight}">{"".join(parts)}</span>'
    )


def panel_stylesheet(theme: Theme) -> str:
    """Qt stylesheet giving the content panel the theme background."""
    return (
        f"background-color: {rgb_hex(theme.background_color)}; "
        f"color: {rgb_hex(theme.text_color)};"
    )
