"""Bounded, deduplicated, insertion-ordered window of numbers.

Backed by an insertion-ordered dict used as an ordered set: membership is
O(1), iteration follows insertion order, and the head entry is the oldest
admitted value. Eviction is FIFO on insertion; lookups never refresh an
entry's position.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from .models import Number


class NumberWindow:
    __slots__ = ("_capacity", "_values")

    def __init__(self, capacity: int, initial: Iterable[Number] = ()):
        if capacity < 1:
            raise ValueError(f"Window capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._values: dict[Number, None] = {}
        for value in initial:
            self.admit(value)

    @property
    def capacity(self) -> int:
        return self._capacity

    def admit(self, value: Number) -> tuple[bool, Optional[Number]]:
        """Add ``value`` at the tail unless it is already present.

        Returns ``(admitted, evicted)``. When the window is full the head is
        removed before the append, so the length never exceeds capacity.
        """
        if value in self._values:
            return False, None
        evicted = None
        if len(self._values) >= self._capacity:
            evicted = next(iter(self._values))
            del self._values[evicted]
        self._values[value] = None
        return True, evicted

    def values(self) -> list[Number]:
        """Copy of the current contents, oldest first."""
        return list(self._values)

    def average(self) -> float:
        if not self._values:
            return 0.0
        count = len(self._values)
        try:
            mean = sum(self._values) / count
        except OverflowError:
            mean = math.inf
        if not math.isfinite(mean):
            # sum overflowed float range; scale each term first
            mean = sum(v / count for v in self._values)
        return round(mean, 2)

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"NumberWindow(capacity={self._capacity}, values={self.values()!r})"
