import asyncio
from typing import Iterable, Optional, Protocol

from averager.core.logger import get_logger
from averager.domain.models import FetchResult, Number, WindowSnapshot, WindowState
from averager.domain.window import NumberWindow
from averager.metrics import (
    WINDOW_ADMITTED,
    WINDOW_AVERAGE,
    WINDOW_DUPLICATES,
    WINDOW_EVICTED,
    WINDOW_SIZE,
)

logger = get_logger("aggregator")


class NumbersFetcher(Protocol):
    async def fetch(self, category: str) -> FetchResult: ...


class WindowAggregator:
    """Owns the process-wide number window.

    All reads and writes of the window go through ``merge`` and ``state``,
    which serialize on one ``asyncio.Lock``. The upstream fetch in ``collect``
    runs before the lock is taken, so slow fetches for different requests
    overlap while window mutation stays strictly one-at-a-time.
    """

    def __init__(
        self,
        capacity: int,
        fetcher: Optional[NumbersFetcher] = None,
        window: Optional[NumberWindow] = None,
    ):
        self.window = window if window is not None else NumberWindow(capacity)
        self.fetcher = fetcher
        self._lock = asyncio.Lock()

    @property
    def capacity(self) -> int:
        return self.window.capacity

    async def collect(self, category: str) -> WindowSnapshot:
        """Fetch numbers for ``category`` and merge them into the window."""
        if self.fetcher is None:
            raise RuntimeError("WindowAggregator has no fetcher configured")
        result = await self.fetcher.fetch(category)
        return await self.merge(result.numbers)

    async def merge(self, numbers: Iterable[Number]) -> WindowSnapshot:
        fetched = list(numbers)
        async with self._lock:
            prev_state = self.window.values()
            admitted = evicted = duplicates = 0
            for value in fetched:
                was_admitted, dropped = self.window.admit(value)
                if not was_admitted:
                    duplicates += 1
                    continue
                admitted += 1
                if dropped is not None:
                    evicted += 1
            curr_state = self.window.values()
            avg = self.window.average()

        WINDOW_ADMITTED.inc(admitted)
        WINDOW_EVICTED.inc(evicted)
        WINDOW_DUPLICATES.inc(duplicates)
        WINDOW_SIZE.set(len(curr_state))
        WINDOW_AVERAGE.set(avg)
        logger.debug(
            "window_merged",
            extra={
                "fetched": len(fetched),
                "admitted": admitted,
                "evicted": evicted,
                "duplicates": duplicates,
                "window_len": len(curr_state),
                "avg": avg,
            },
        )
        return WindowSnapshot(
            window_prev_state=prev_state,
            window_curr_state=curr_state,
            numbers=fetched,
            avg=avg,
        )

    async def state(self) -> WindowState:
        async with self._lock:
            return WindowState(
                window_curr_state=self.window.values(),
                avg=self.window.average(),
                capacity=self.window.capacity,
            )

