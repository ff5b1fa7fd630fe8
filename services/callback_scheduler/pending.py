"""
Due-time ordered set of pending callbacks.
"""

import heapq
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .models import Entry


class PendingSet:
    """Min-heap of entries keyed on ``due_at``; the soonest entry is always at index 0.

    Not synchronised. Callers hold the scheduler's shared lock around every
    operation.
    """

    def __init__(self):
        self._heap: List["Entry"] = []

    def push(self, entry: "Entry") -> None:
        heapq.heappush(self._heap, entry)

    def pop(self) -> Optional["Entry"]:
        """Remove and return the soonest entry, or ``None`` when empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)

    def peek(self) -> Optional["Entry"]:
        """Return the soonest entry without removing it, or ``None`` when empty."""
        if not self._heap:
            return None
        return self._heap[0]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
