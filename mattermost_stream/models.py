"""Sink option models."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import settings


class StreamOptions(BaseModel):
    """Options for a single webhook sink.

    ``wait`` controls buffering: ``False`` (or ``0``) sends every write on its
    own, ``True`` buffers with the default delay and a positive integer
    buffers with that many milliseconds of debounce. ``defaults`` is stored
    as a read-only copy.
    """

    model_config = ConfigDict(frozen=True)

    defaults: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    wait: Union[bool, int] = False

    @field_validator("defaults")
    @classmethod
    def freeze_defaults(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_validator("wait")
    @classmethod
    def normalize_wait(cls, value: Union[bool, int]) -> Union[bool, int]:
        if isinstance(value, bool):
            return settings.default_wait_ms if value else False
        if value < 0:
            raise ValueError("wait must be a boolean or a non-negative number of milliseconds")
        return value or False

    @property
    def buffered(self) -> bool:
        """True when writes are coalesced before sending."""
        return self.wait is not False

    @property
    def wait_ms(self) -> Optional[int]:
        """Debounce delay in milliseconds, or None when unbuffered."""
        return self.wait if self.buffered else None
