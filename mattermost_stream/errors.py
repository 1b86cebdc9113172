"""Errors raised and reported by webhook sinks."""

from typing import Optional


class StreamError(Exception):
    """Base class for all sink errors."""


class ConstructionError(StreamError, ValueError):
    """Sink could not be created (e.g. no webhook URL)."""


class MissingTextField(StreamError, ValueError):
    """Payload resolved to no usable "text" value."""

    def __init__(self, message: str = 'Trying to send a payload without a "text" property'):
        super().__init__(message)


class InvalidFragment(StreamError, TypeError):
    """A buffered sink was given something other than text."""


class SinkClosedError(StreamError):
    """Write attempted on a closed sink."""


class TransportError(StreamError):
    """The HTTP request could not be completed."""

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original


class UnexpectedStatus(TransportError):
    """The webhook answered with something other than 200."""

    def __init__(self, status_code: int):
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code
