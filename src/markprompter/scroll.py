#!/usr/bin/env python3
"""Scroll controller for MarkPrompter.

This module owns the playback state machine and the per-frame position
update. States: stopped, playing, paused at a heading, paused manually.
The controller never renders or measures; the caller supplies elapsed
time, heading offsets and the content height on every frame.
"""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable, Optional

from .errors import RangeError
from .logging_utils import warn
from .models import (
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    FONT_SIZE_STEP,
    PAUSE_DURATION_MAX,
    PAUSE_DURATION_MIN,
    SPEED_MAX,
    SPEED_MIN,
    SPEED_STEP,
    PlaybackState,
    PlayerStatus,
)


# ============================================================
# Range Helpers
# ============================================================

def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a value into ``[lo, hi]``.

    Raises:
        RangeError: If the value is NaN or not a number
    """
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise RangeError(f"Not a number: {value!r}") from e
    if math.isnan(v):
        raise RangeError("Value is NaN")
    return min(max(v, lo), hi)


def next_heading_offset(
    offsets: Iterable[float],
    start: float,
    end: float,
) -> Optional[float]:
    """Return the smallest offset in the half-open interval ``(start, end]``.

    Args:
        offsets: Heading offsets in pixels, any order
        start: Current position (excluded)
        end: Candidate position (included)

    Returns:
        The nearest heading offset reached, or None
    """
    hits = [o for o in offsets if start < o <= end]
    return min(hits) if hits else None


# ============================================================
# Controller
# ============================================================

class ScrollController:
    """Playback state machine driven once per rendered frame."""

    def __init__(self, state: Optional[PlaybackState] = None, *, quiet: bool = False) -> None:
        st = state or PlaybackState()
        self.quiet = quiet
        self._state = replace(
            st,
            speed=self._initial("speed", st.speed, SPEED_MIN, SPEED_MAX),
            font_size=self._initial("font_size", st.font_size, FONT_SIZE_MIN, FONT_SIZE_MAX),
            pause_duration=self._initial(
                "pause_duration", st.pause_duration, PAUSE_DURATION_MIN, PAUSE_DURATION_MAX
            ),
            position=max(0.0, st.position),
        )

    def _initial(self, name: str, value: float, lo: float, hi: float) -> float:
        """Clamp a starting value, falling back to the default when unusable."""
        try:
            return clamp(value, lo, hi)
        except RangeError as e:
            default = getattr(PlaybackState(), name)
            warn(f"Using default {name} {default:g}: {e}", quiet=self.quiet)
            return default

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def status(self) -> PlayerStatus:
        return self._state.status

    def _set(self, **changes) -> PlaybackState:
        self._state = replace(self._state, **changes)
        return self._state

    # ---------------- transitions ----------------

    def start(self) -> PlaybackState:
        """Begin (or resume) playback."""
        if self._state.status in (PlayerStatus.STOPPED, PlayerStatus.PAUSED_MANUAL):
            return self._set(status=PlayerStatus.PLAYING, pending_pause_until=None)
        return self._state

    def toggle(self) -> PlaybackState:
        """Play/pause button: flip between playing and a manual pause."""
        if self._state.running:
            return self._set(status=PlayerStatus.PAUSED_MANUAL, pending_pause_until=None)
        return self._set(status=PlayerStatus.PLAYING, pending_pause_until=None)

    def stop(self) -> PlaybackState:
        return self._set(status=PlayerStatus.STOPPED, pending_pause_until=None)

    def restart(self) -> PlaybackState:
        """Jump back to the top; keep playing only if playback was running."""
        status = PlayerStatus.PLAYING if self._state.running else PlayerStatus.STOPPED
        return self._set(position=0.0, status=status, pending_pause_until=None)

    def seek(self, position: float, content_height: float) -> PlaybackState:
        """Move to an absolute offset, e.g. after the user drags the view."""
        try:
            pos = clamp(position, 0.0, max(0.0, content_height))
        except RangeError as e:
            warn(f"Ignoring seek: {e}", quiet=self.quiet)
            return self._state
        return self._set(position=pos)

    def clamp_position(self, content_height: float) -> PlaybackState:
        """Pull the position back inside the content after it shrank."""
        limit = max(0.0, content_height)
        if self._state.position > limit:
            return self._set(position=limit)
        return self._state

    # ---------------- settings ----------------

    def _set_clamped(self, name: str, value: float, lo: float, hi: float) -> PlaybackState:
        try:
            v = clamp(value, lo, hi)
        except RangeError as e:
            warn(f"Ignoring {name}: {e}", quiet=self.quiet)
            return self._state
        return self._set(**{name: v})

    def set_speed(self, value: float) -> PlaybackState:
        return self._set_clamped("speed", value, SPEED_MIN, SPEED_MAX)

    def adjust_speed(self, delta: float = SPEED_STEP) -> PlaybackState:
        return self.set_speed(self._state.speed + delta)

    def set_font_size(self, value: float) -> PlaybackState:
        return self._set_clamped("font_size", value, FONT_SIZE_MIN, FONT_SIZE_MAX)

    def adjust_font_size(self, delta: float = FONT_SIZE_STEP) -> PlaybackState:
        return self.set_font_size(self._state.font_size + delta)

    def set_pause_duration(self, value: float) -> PlaybackState:
        return self._set_clamped("pause_duration", value, PAUSE_DURATION_MIN, PAUSE_DURATION_MAX)

    def set_pause_at_headings(self, enabled: bool) -> PlaybackState:
        changes = {"pause_at_headings": bool(enabled)}
        if not enabled and self._state.status is PlayerStatus.PAUSED_AT_HEADING:
            changes.update(status=PlayerStatus.PLAYING, pending_pause_until=None)
        return self._set(**changes)

    def set_auto_restart(self, enabled: bool) -> PlaybackState:
        return self._set(auto_restart=bool(enabled))

    # ---------------- per-frame update ----------------

    def advance(
        self,
        elapsed_seconds: float,
        heading_offsets: Iterable[float] = (),
        content_height: float = 0.0,
    ) -> PlaybackState:
        """Advance playback by one frame.

        Movement is linear in elapsed time, so covering the same wall-clock
        duration in one frame or in many ends at the same position. With
        heading pauses enabled the position stops exactly on the first
        heading offset inside ``(position, position + speed * elapsed]``;
        the pause timer starts at the moment that heading was reached.

        Args:
            elapsed_seconds: Wall-clock time since the previous frame
            heading_offsets: Vertical offset of every heading, in pixels
            content_height: Maximum scroll offset of the rendered content

        Returns:
            The new playback state (also stored on the controller)
        """
        st = self._state
        if not st.running:
            return st
        try:
            elapsed = float(elapsed_seconds)
        except (TypeError, ValueError):
            return st
        if not math.isfinite(elapsed) or elapsed <= 0:
            return st

        height = max(0.0, float(content_height))
        offsets = list(heading_offsets)

        if st.status is PlayerStatus.PAUSED_AT_HEADING:
            now = st.clock + elapsed
            until = st.pending_pause_until if st.pending_pause_until is not None else st.clock
            if now < until:
                return self._set(clock=now)
            # the pause may have ended before this frame began
            elapsed = now - until
            st = self._set(status=PlayerStatus.PLAYING, pending_pause_until=None, clock=until)
            if elapsed <= 0:
                return st

        return self._scroll(st, elapsed, offsets, height)

    def _scroll(self, st: PlaybackState, elapsed: float, offsets, height: float) -> PlaybackState:
        now = st.clock + elapsed
        candidate = st.position + st.speed * elapsed

        if st.pause_at_headings and offsets:
            target = next_heading_offset(offsets, st.position, min(candidate, height))
            if target is not None:
                reached_at = st.clock + (target - st.position) / st.speed
                return self._set(
                    position=target,
                    status=PlayerStatus.PAUSED_AT_HEADING,
                    pending_pause_until=reached_at + st.pause_duration,
                    clock=now,
                )

        if candidate >= height:
            if st.auto_restart:
                return self._set(position=0.0, status=PlayerStatus.PLAYING, clock=now)
            return self._set(position=height, status=PlayerStatus.STOPPED, clock=now)

        return self._set(position=candidate, clock=now)

    # ---------------- queries ----------------

    def remaining_seconds(self, content_height: float) -> float:
        """Estimate the read time left at the current speed."""
        remaining = max(0.0, content_height - self._state.position)
        return remaining / self._state.speed
