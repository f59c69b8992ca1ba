#!/usr/bin/env python3
"""Markdown document model for MarkPrompter.

This module turns raw markdown text into display blocks:
- Block-level parsing (headings 1-6 and paragraphs, one per source line)
- Inline span parsing (code, bold, italic; flat, non-nested)
- Loading documents from disk
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple, Union

from .errors import LoadError
from .models import Block, BlockKind, Span, SpanStyle


# ============================================================
# Constants
# ============================================================

MARKDOWN_EXTS = {".md", ".markdown"}

HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")


# ============================================================
# Inline Parsing
# ============================================================

def _find_single(text: str, marker: str, start: int) -> int:
    """Find the next lone ``marker`` at or after ``start``.

    Doubled markers belong to a bold delimiter and are skipped.

    Returns:
        Index of the marker, or -1 if there is none
    """
    j = start
    n = len(text)
    while j < n:
        j = text.find(marker, j)
        if j < 0:
            return -1
        if text.startswith(marker * 2, j):
            j += 2
            continue
        return j
    return -1


def parse_inline(text: str) -> List[Span]:
    """Split a line of text into styled spans.

    Markers are recognized left to right without overlap, in priority
    order: inline code (single backticks), bold (``**`` or ``__``), then
    italic (single ``*`` or ``_``). An opener without a matching closer
    is kept as literal text. Styles never nest.

    Args:
        text: Text of a single block, heading markers already removed

    Returns:
        List of spans whose texts concatenate to the visible text
    """
    spans: List[Span] = []
    plain: List[str] = []

    def emit(content: str, style: SpanStyle) -> None:
        if plain:
            spans.append(Span("".join(plain), SpanStyle.PLAIN))
            plain.clear()
        spans.append(Span(content, style))

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if ch == "`":
            end = text.find("`", i + 1)
            if end > i + 1:
                emit(text[i + 1:end], SpanStyle.CODE)
                i = end + 1
                continue
            plain.append(ch)
            i += 1
            continue

        if ch in "*_":
            double = ch * 2
            if text.startswith(double, i):
                end = text.find(double, i + 2)
                if end > i + 2:
                    emit(text[i + 2:end], SpanStyle.BOLD)
                    i = end + 2
                    continue
                plain.append(double)
                i += 2
                continue

            end = _find_single(text, ch, i + 1)
            if end > i + 1:
                emit(text[i + 1:end], SpanStyle.ITALIC)
                i = end + 1
                continue
            plain.append(ch)
            i += 1
            continue

        plain.append(ch)
        i += 1

    if plain:
        spans.append(Span("".join(plain), SpanStyle.PLAIN))
    return spans


# ============================================================
# Block Parsing
# ============================================================

def parse_markdown(text: str) -> List[Block]:
    """Parse markdown text into an ordered list of display blocks.

    Each non-blank line becomes one block. Lines starting with one to six
    ``#`` characters followed by whitespace are headings; everything else
    is a paragraph. Blank lines only separate blocks. Parsing never fails.

    Args:
        text: Full markdown document

    Returns:
        Blocks in source order
    """
    blocks: List[Block] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue

        m = HEADING_RE.match(line)
        if m:
            kind = BlockKind.HEADING
            level = len(m.group(1))
            content = m.group(2).strip()
        else:
            kind = BlockKind.PARAGRAPH
            level = 0
            content = line

        blocks.append(Block(
            kind=kind,
            level=level,
            spans=tuple(parse_inline(content)),
            index=len(blocks),
        ))
    return blocks


def heading_indices(blocks: List[Block]) -> List[int]:
    """Return the list positions of heading blocks."""
    return [i for i, b in enumerate(blocks) if b.is_heading]


def outline(blocks: List[Block]) -> List[Tuple[int, str]]:
    """Return ``(level, text)`` pairs for every heading, in order."""
    return [(b.level, b.text) for b in blocks if b.is_heading]


# ============================================================
# Loading
# ============================================================

def is_markdown_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in MARKDOWN_EXTS


def read_document_text(path: Union[str, Path]) -> str:
    """Read a document as UTF-8 text.

    Raises:
        LoadError: If the file can't be read or isn't valid UTF-8
    """
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise LoadError(f"Not a UTF-8 text file: {p}", path=p) from e
    except OSError as e:
        raise LoadError(f"Cannot read {p}: {e.strerror or e}", path=p) from e


def load_document(path: Union[str, Path]) -> List[Block]:
    """Read and parse a markdown file.

    Args:
        path: Path to the document

    Returns:
        Parsed blocks

    Raises:
        LoadError: If the file can't be read or isn't valid UTF-8
    """
    return parse_markdown(read_document_text(path))
