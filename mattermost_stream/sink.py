"""Writable webhook sink."""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Optional, Union

from .buffering import FlushCoordinator
from .config import settings
from .errors import (
    ConstructionError,
    InvalidFragment,
    SinkClosedError,
    StreamError,
)
from .models import StreamOptions
from .payload import build_payload, coerce_text
from .transport import WebhookClient

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], Union[None, Awaitable[None]]]


class WebhookSink:
    """
    Accept writes and deliver them as webhook notifications.

    Unbuffered sinks send each write on its own and ``write`` returns once the
    webhook has answered 200. Buffered sinks coalesce text writes and return
    immediately; delivery failures then only reach the ``on_error`` handlers.
    """

    def __init__(
        self,
        webhook_url: str,
        options: Optional[StreamOptions] = None,
        client: Optional[WebhookClient] = None,
    ):
        if not webhook_url:
            raise ConstructionError("webhook_url argument required but not supplied")

        self.webhook_url = webhook_url
        self.options = options or StreamOptions()
        self.client = client or WebhookClient(webhook_url)
        self._error_handlers: list[ErrorHandler] = []
        self._inflight: set[asyncio.Task] = set()
        self._closed = False
        # One write at a time, in submission order
        self._write_lock = asyncio.Lock()

        self._coordinator: Optional[FlushCoordinator] = None
        if self.options.buffered:
            self._coordinator = FlushCoordinator(
                on_flush=self._schedule_delivery,
                wait_ms=self.options.wait_ms,
                threshold=settings.max_text_length,
            )

    @property
    def buffered(self) -> bool:
        """True when writes are coalesced."""
        return self._coordinator is not None

    @property
    def pending(self) -> str:
        """Buffered text not yet flushed."""
        return self._coordinator.pending if self._coordinator else ""

    @property
    def closed(self) -> bool:
        return self._closed

    def on_error(self, handler: ErrorHandler) -> ErrorHandler:
        """Register a handler for out-of-band errors. Usable as a decorator."""
        self._error_handlers.append(handler)
        return handler

    async def write(self, item: Any) -> None:
        """
        Write one item.

        Args:
            item: Text or bytes; unbuffered sinks also accept a mapping of
                payload fields

        Raises:
            SinkClosedError: If the sink was closed
            InvalidFragment: If a buffered sink is given a mapping
            StreamError: Unbuffered sinks only, when building or delivering fails
        """
        if self._closed:
            raise SinkClosedError("write after close")

        async with self._write_lock:
            if self._coordinator is None:
                await self._send_now(item)
                return

            if item is None or isinstance(item, Mapping):
                raise InvalidFragment("buffered sinks only accept text or bytes")
            await self._coordinator.add(coerce_text(item))

    async def flush(self) -> None:
        """Send buffered text now and wait for in-flight deliveries."""
        if self._coordinator is not None:
            await self._coordinator.flush()
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def close(self) -> None:
        """Flush and stop accepting writes."""
        if self._closed:
            return
        await self.flush()
        self._closed = True

    async def __aenter__(self) -> "WebhookSink":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def _send_now(self, item: Any) -> None:
        try:
            payload = build_payload(item, self.options.defaults)
            await self.client.send(payload)
        except StreamError as e:
            await self._emit_error(e)
            raise

    async def _schedule_delivery(self, text: str) -> None:
        """Start delivering flushed text without waiting for it."""
        task = asyncio.create_task(self._deliver(text))
        self._inflight.add(task)
        task.add_done_callback(self._delivery_done)

    async def _deliver(self, text: str) -> None:
        try:
            await self.client.send(build_payload(text, self.options.defaults))
        except StreamError as e:
            await self._emit_error(e)

    def _delivery_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Webhook delivery failed: %s", exc, exc_info=exc)

    async def _emit_error(self, error: Exception) -> None:
        if not self._error_handlers:
            logger.error("Webhook sink error: %s", error)
            return
        for handler in self._error_handlers:
            result = handler(error)
            if inspect.isawaitable(result):
                await result


def create(
    webhook_url: str,
    options: Union[StreamOptions, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> WebhookSink:
    """
    Create a webhook sink.

    Args:
        webhook_url: Incoming webhook URL
        options: StreamOptions or a mapping with "defaults" and "wait"
        **kwargs: Option fields, applied over ``options``

    Returns:
        A ready WebhookSink

    Raises:
        ConstructionError: If webhook_url is empty
    """
    if not webhook_url:
        raise ConstructionError("webhook_url argument required but not supplied")

    if isinstance(options, StreamOptions):
        fields = {"defaults": dict(options.defaults), "wait": options.wait}
    else:
        fields = dict(options or {})
    fields.update(kwargs)

    sink = WebhookSink(webhook_url, StreamOptions(**fields))
    logger.debug(
        "Created webhook sink (buffered=%s, wait_ms=%s)",
        sink.buffered,
        sink.options.wait_ms,
    )
    return sink
