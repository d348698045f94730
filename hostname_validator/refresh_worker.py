from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from .utils.logging import log, warn


class SuffixRefreshWorker:
    """
    Periodically re-fetches the suffix list.

    `refresh` is any coroutine function that performs one fetch+replace cycle
    and returns the rule count. A failing cycle is logged and the schedule
    continues. `stop()` interrupts only the wait between cycles; a fetch that
    is already running completes (or times out) first.
    """

    def __init__(self, refresh: Callable[[], Awaitable[int]], interval_s: float = 24 * 60 * 60) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self._refresh = refresh
        self.interval_s = interval_s
        self.cycles = 0
        self.failures = 0
        self._stop: asyncio.Event | None = None
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int | None:
        self.cycles += 1
        try:
            count = await self._refresh()
        except Exception as e:
            self.failures += 1
            warn(f"Suffix list refresh failed (cycle {self.cycles}): {e}")
            return None
        log(f"Suffix list refreshed: {count} rules (cycle {self.cycles}).")
        return count

    async def run(self) -> None:
        if self._stop is None:
            self._stop = asyncio.Event()
        stop = self._stop
        while not stop.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval_s)
            except asyncio.TimeoutError:
                continue

    def start(self) -> asyncio.Task:
        """Schedule `run()` on the running event loop."""
        if self.running:
            raise RuntimeError("refresh worker already running")
        self._stop = asyncio.Event()
        self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        if self._stop is not None:
            self._stop.set()
        if self._task is not None:
            await self._task
            self._task = None
