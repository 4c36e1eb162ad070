"""Inbound event decoding."""

import base64
import json
from typing import Any, Mapping


class EventDecodeError(ValueError):
    """Raised when an inbound event payload cannot be decoded."""


def decode_event(event: Mapping[str, Any]) -> dict:
    """
    Decode an inbound event into an item.

    The event carries a ``data`` field holding base64-encoded UTF-8 JSON.

    Raises:
        EventDecodeError: If the payload is missing, not base64, not UTF-8,
            not JSON, or not a JSON object.
    """
    try:
        raw = event["data"]
    except (KeyError, TypeError) as exc:
        raise EventDecodeError("Event has no data field") from exc

    try:
        text = base64.b64decode(raw, validate=True).decode("utf-8")
        data = json.loads(text)
    except (ValueError, TypeError) as exc:
        raise EventDecodeError(f"Malformed event payload: {exc}") from exc

    if not isinstance(data, dict):
        raise EventDecodeError(f"Event payload is not an object: {type(data).__name__}")
    return data


def encode_event(item: Mapping[str, Any]) -> dict:
    """Build an inbound-style event from an item (used by the CLIs)."""
    payload = json.dumps(dict(item), ensure_ascii=False).encode("utf-8")
    return {"data": base64.b64encode(payload).decode("ascii")}
