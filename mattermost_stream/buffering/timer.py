"""Restartable debounce timer."""

import asyncio
from typing import Awaitable, Callable, Optional


class DebounceTimer:
    """Single deferred callback that is re-armed on every write."""

    def __init__(self, delay_ms: float):
        self.delay_ms = delay_ms
        self._task: Optional[asyncio.Task] = None

    async def start(self, on_expire: Callable[[], Awaitable[None]]) -> None:
        """
        Arm the timer, replacing any timer that is already armed.

        Args:
            on_expire: Called once the delay elapses without a cancel
        """
        await self.cancel()
        self._task = asyncio.create_task(self._wait_and_fire(on_expire))

    async def cancel(self) -> None:
        """Disarm the timer. Safe to call when nothing is armed."""
        task = self._task
        self._task = None

        if task is None or task.done():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _wait_and_fire(self, on_expire: Callable[[], Awaitable[None]]) -> None:
        """Sleep for the delay, then disarm and run the callback."""
        await asyncio.sleep(self.delay_ms / 1000.0)
        self._task = None
        await on_expire()

    @property
    def is_armed(self) -> bool:
        """Check if a flush is currently scheduled."""
        return self._task is not None
