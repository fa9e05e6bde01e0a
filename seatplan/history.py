"""Snapshot-based undo history."""

import logging
from collections import deque

from .models import Seat

logger = logging.getLogger(__name__)


class HistoryManager:
    """Bounded stack of full seat-list snapshots.

    A snapshot is taken before each mutation, so ``pop()`` returns the state
    immediately prior to the most recent mutation. When the stack is full the
    oldest entry is discarded.
    """

    def __init__(self, capacity: int = 30):
        """Initialize history.

        Args:
            capacity: Maximum number of snapshots kept (default: 30)
        """
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._stack: deque[list[Seat]] = deque(maxlen=capacity)

    def snapshot(self, seats: list[Seat]) -> None:
        """Push a deep copy of the given seat list."""
        self._stack.append([seat.model_copy(deep=True) for seat in seats])
        logger.debug(f"History snapshot taken ({len(self._stack)}/{self.capacity})")

    def pop(self) -> list[Seat] | None:
        """Remove and return the most recent snapshot, or None if empty."""
        if not self._stack:
            return None
        return self._stack.pop()

    def clear(self) -> None:
        self._stack.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._stack)

    def __len__(self) -> int:
        return len(self._stack)
