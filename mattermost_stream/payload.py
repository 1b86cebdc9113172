"""Payload building and wire encoding."""

import json
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from .errors import MissingTextField


def merge(*mappings: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dict with the mappings applied left to right."""
    merged: dict[str, Any] = {}
    for mapping in mappings:
        merged.update(mapping)
    return merged


def coerce_text(value: Any) -> str:
    """Return the string form of a "text" value."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def build_payload(item: Any, defaults: Mapping[str, Any]) -> dict[str, Any]:
    """
    Build the payload for a single write.

    Args:
        item: Text, bytes, number or a mapping of payload fields
        defaults: Fields applied before the item's own fields

    Returns:
        New payload dict with a string "text" field

    Raises:
        MissingTextField: If neither item nor defaults supply a text
    """
    if isinstance(item, Mapping):
        payload = merge(defaults, item)
    else:
        payload = merge(defaults)
        payload["text"] = item

    if payload.get("text") is None:
        raise MissingTextField()

    payload["text"] = coerce_text(payload["text"])
    return payload


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def encode_form(payload: Mapping[str, Any]) -> dict[str, str]:
    """Form fields for the request body: the JSON payload under "payload"."""
    return {"payload": json.dumps(payload, default=_json_default)}
