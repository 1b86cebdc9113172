"""Async webhook HTTP client."""

import logging
from typing import Any, Mapping, Optional

import httpx

from ..config import settings
from ..errors import TransportError, UnexpectedStatus
from ..payload import encode_form

logger = logging.getLogger(__name__)


class WebhookClient:
    """POST form-encoded payloads to an incoming webhook."""

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = settings.http_timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def send(self, payload: Mapping[str, Any]) -> None:
        """
        Deliver one payload.

        Args:
            payload: Payload dict, serialized to JSON under the "payload" field

        Raises:
            UnexpectedStatus: If the webhook answers with anything but 200
            TransportError: If the request itself fails
        """
        data = encode_form(payload)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, data=data)
        except httpx.RequestError as e:
            raise TransportError(str(e) or type(e).__name__, original=e) from e

        if response.status_code != 200:
            raise UnexpectedStatus(response.status_code)

        logger.debug("Delivered payload (%d chars of text)", len(payload.get("text", "")))
