"""Turn writes into Mattermost/Slack-style webhook notifications."""

from .errors import (
    ConstructionError,
    InvalidFragment,
    MissingTextField,
    SinkClosedError,
    StreamError,
    TransportError,
    UnexpectedStatus,
)
from .models import StreamOptions
from .payload import build_payload, encode_form
from .sink import WebhookSink, create

__all__ = [
    # Sink
    "create",
    "WebhookSink",
    "StreamOptions",
    # Payload
    "build_payload",
    "encode_form",
    # Errors
    "StreamError",
    "ConstructionError",
    "MissingTextField",
    "InvalidFragment",
    "SinkClosedError",
    "TransportError",
    "UnexpectedStatus",
]
