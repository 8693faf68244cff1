"""Bounded, most-recent-first log of evaluated rolls.

Backed by a fixed-capacity circular buffer: ``_head`` is the slot holding the
newest entry, and the oldest entry sits ``_size - 1`` slots behind it. Appending
past capacity overwrites the oldest slot, so append and evict are both O(1).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from dicetray.engine import RollResult

HISTORY_CAPACITY = 20


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of one roll. Shares no mutable state with the line that produced it."""

    id: int
    label: str
    dice_notation: str
    result: RollResult


class HistoryLog:
    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._slots: list[HistoryEntry | None] = [None] * capacity
        self._head = -1
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def head(self) -> HistoryEntry | None:
        """The most recent entry, or None when empty."""
        if not self._size:
            return None
        return self._slots[self._head]

    def append(self, entry: HistoryEntry) -> None:
        """Insert entry at the head, silently evicting the oldest entry when full."""
        self._head = (self._head + 1) % self.capacity
        self._slots[self._head] = entry
        if self._size < self.capacity:
            self._size += 1

    def clear(self) -> None:
        self._slots = [None] * self.capacity
        self._head = -1
        self._size = 0

    def entries(self) -> list[HistoryEntry]:
        """Return all entries, most recent first."""
        return list(self)

    def __iter__(self) -> Iterator[HistoryEntry]:
        for offset in range(self._size):
            entry = self._slots[(self._head - offset) % self.capacity]
            assert entry is not None
            yield entry

    def __len__(self) -> int:
        return self._size
