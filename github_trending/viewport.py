"""Cursor and scroll origin for a single scrollable pane.

The cursor is an absolute row index into the pane content. ``origin`` is the
first content row drawn at the top of the pane. After every mutation:

- ``0 <= cursor <= max(0, length - 1)``
- ``origin <= cursor <= origin + height - 1`` when the pane has content
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Viewport:
    height: int = 1
    length: int = 0
    origin: int = 0
    cursor: int = 0

    def __post_init__(self) -> None:
        self.height = max(1, self.height)
        self.length = max(0, self.length)
        self.set_cursor(self.cursor)

    def last_index(self) -> int:
        return max(0, self.length - 1)

    def set_cursor(self, index: int) -> bool:
        """Move the cursor to ``index`` (clamped). Returns True if it moved."""
        previous = self.cursor
        self.cursor = max(0, min(index, self.last_index()))
        self._scroll_to_cursor()
        return self.cursor != previous

    def move(self, delta: int) -> bool:
        if self.length == 0:
            return False
        return self.set_cursor(self.cursor + delta)

    def reset(self, length: int | None = None) -> None:
        if length is not None:
            self.length = max(0, length)
        self.origin = 0
        self.cursor = 0

    def set_height(self, height: int) -> None:
        self.height = max(1, height)
        self._scroll_to_cursor()

    def visible_range(self) -> range:
        stop = min(self.length, self.origin + self.height)
        return range(self.origin, max(self.origin, stop))

    def _scroll_to_cursor(self) -> None:
        if self.length == 0:
            self.origin = 0
            return
        if self.cursor < self.origin:
            self.origin = self.cursor
        elif self.cursor > self.origin + self.height - 1:
            self.origin = self.cursor - self.height + 1
        # content may have shrunk below a stale origin
        max_origin = max(0, self.length - self.height)
        self.origin = max(0, min(self.origin, max_origin, self.cursor))
