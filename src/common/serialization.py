"""Serialization utilities."""

import json
from datetime import datetime
from typing import Any


def _default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_item(item: dict) -> bytes:
    """Serialize an item to UTF-8 JSON bytes, converting datetimes to ISO strings."""
    return json.dumps(item, default=_default, ensure_ascii=False).encode("utf-8")
