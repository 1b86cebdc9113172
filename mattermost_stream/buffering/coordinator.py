"""Size/time based coalescing of text fragments."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from ..config import settings
from .timer import DebounceTimer

logger = logging.getLogger(__name__)


class FlushState(str, Enum):
    """Buffer state."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"


class FlushCoordinator:
    """
    Coalesce consecutive text fragments into fewer sends.

    Fragments are held until no write arrives for ``wait_ms`` milliseconds,
    or until the buffered text reaches ``threshold`` characters, whichever
    comes first. A fragment that would push the buffer to the threshold is
    split so the forced flush is exactly ``threshold`` characters long; the
    rest of the fragment starts the next buffer.
    """

    def __init__(
        self,
        on_flush: Callable[[str], Awaitable[None]],
        wait_ms: int,
        threshold: int = settings.max_text_length,
    ):
        """
        Initialize the coordinator.

        Args:
            on_flush: Async function called with each flushed text
            wait_ms: Debounce delay, restarted on every write
            threshold: Buffered length that forces an immediate flush
        """
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        self.on_flush = on_flush
        self.wait_ms = wait_ms
        self.threshold = threshold
        self._fragments: list[str] = []
        self._length = 0
        self._timer = DebounceTimer(wait_ms)
        # Fragments are appended in the order add() was called
        self._lock = asyncio.Lock()

    async def add(self, fragment: str) -> None:
        """Buffer a fragment, flushing first if it fills the buffer."""
        async with self._lock:
            await self._timer.cancel()

            while self._length + len(fragment) >= self.threshold:
                split_at = self.threshold - self._length
                self._append(fragment[:split_at])
                fragment = fragment[split_at:]
                logger.debug("Threshold reached, flushing %d chars", self._length)
                await self._flush_now()

            if fragment:
                self._append(fragment)

            if self._fragments:
                await self._timer.start(self._on_timer)

    async def flush(self) -> None:
        """Send whatever is buffered now."""
        async with self._lock:
            await self._timer.cancel()
            await self._flush_now()

    def _append(self, fragment: str) -> None:
        self._fragments.append(fragment)
        self._length += len(fragment)

    def _drain(self) -> str:
        text = "".join(self._fragments)
        self._fragments = []
        self._length = 0
        return text

    async def _flush_now(self) -> None:
        text = self._drain()
        if text:
            await self.on_flush(text)

    async def _on_timer(self) -> None:
        logger.debug("Debounce elapsed, flushing %d chars", self._length)
        await self._flush_now()

    @property
    def pending(self) -> str:
        """Text buffered but not yet sent."""
        return "".join(self._fragments)

    @property
    def pending_length(self) -> int:
        """Length of the buffered text."""
        return self._length

    @property
    def state(self) -> FlushState:
        """Idle when nothing is buffered, accumulating otherwise."""
        return FlushState.ACCUMULATING if self._fragments else FlushState.IDLE
