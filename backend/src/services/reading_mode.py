"""Distraction-free reading mode: one entry at a time."""

from __future__ import annotations

from typing import Optional, Sequence

from ..models.entry import Entry


class ReadingSession:
    """Cursor over a fixed list of entries; movement stops at both ends."""

    def __init__(self, entries: Sequence[Entry], index: int = 0) -> None:
        self.entries = list(entries)
        self.index = index

    @property
    def current(self) -> Optional[Entry]:
        if 0 <= self.index < len(self.entries):
            return self.entries[self.index]
        return None

    @property
    def has_next(self) -> bool:
        return self.index < len(self.entries) - 1

    @property
    def has_prev(self) -> bool:
        return self.index > 0

    def next(self) -> bool:
        if not self.has_next:
            return False
        self.index += 1
        return True

    def prev(self) -> bool:
        if not self.has_prev:
            return False
        self.index -= 1
        return True

    @property
    def position_label(self) -> str:
        return f"Entry {self.index + 1} of {len(self.entries)}"


__all__ = ["ReadingSession"]
