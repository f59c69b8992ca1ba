#!/usr/bin/env python3
"""Poll-based file change detection.

The GUI calls ``FileWatcher.poll`` from a timer on the UI thread; no
background threads are involved.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class FileWatcher:
    """Report when a file's modification time moves forward."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._last_mtime: Optional[float] = self._mtime()

    def _mtime(self) -> Optional[float]:
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def poll(self) -> bool:
        """Return True once per observed change since the last poll.

        A missing file is never reported. Saving through a rename shows up
        as a change as soon as the new file is in place.
        """
        current = self._mtime()
        if current is None:
            return False
        if self._last_mtime is None:
            self._last_mtime = current
            return False
        if current > self._last_mtime:
            self._last_mtime = current
            return True
        return False
