"""Root conftest for path setup and shared fixtures.

This file is loaded first by pytest and ensures the project root
is on sys.path before any test modules are imported.
"""

import sys
from pathlib import Path

# Add project root to path IMMEDIATELY
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import json
from typing import Any, Optional
from urllib.parse import parse_qs

import httpx
import pytest

from mattermost_stream.models import StreamOptions
from mattermost_stream.sink import WebhookSink
from mattermost_stream.transport import WebhookClient


WEBHOOK_URL = "http://mattermost.test/hooks/abc123"


# =============================================================================
# Fake Webhook Endpoint
# =============================================================================


class WebhookRecorder:
    """Stand-in webhook endpoint backed by httpx.MockTransport."""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        self.forms: list[dict[str, list[str]]] = []
        self.payloads: list[dict[str, Any]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        form = parse_qs(request.content.decode("utf-8"))
        self.forms.append(form)
        self.payloads.append(json.loads(form["payload"][0]))
        return httpx.Response(self.status_code)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def texts(self) -> list[str]:
        return [p["text"] for p in self.payloads]


@pytest.fixture
def recorder() -> WebhookRecorder:
    """Webhook endpoint that answers 200."""
    return WebhookRecorder()


@pytest.fixture
def make_sink(recorder):
    """Factory for sinks wired to the recorder."""

    def _make(
        wait: Any = False,
        defaults: Optional[dict[str, Any]] = None,
        endpoint: Optional[WebhookRecorder] = None,
    ) -> WebhookSink:
        endpoint = endpoint or recorder
        options = StreamOptions(defaults=defaults or {}, wait=wait)
        client = WebhookClient(WEBHOOK_URL, transport=endpoint.transport)
        return WebhookSink(WEBHOOK_URL, options, client=client)

    return _make


@pytest.fixture
def error_tracker():
    """Collect errors reported to on_error handlers."""

    class Tracker:
        def __init__(self):
            self.errors: list[Exception] = []

        async def on_error(self, error: Exception) -> None:
            self.errors.append(error)

    return Tracker()
