"""Tests for common.events module."""

import base64
import json

import pytest

from common.events import EventDecodeError, decode_event, encode_event


def _event(payload) -> dict:
    return {"data": base64.b64encode(payload).decode("ascii")}


class TestDecodeEvent:
    def test_decodes_base64_json(self) -> None:
        event = _event(json.dumps({"id": "1", "url": "https://example.com"}).encode())
        assert decode_event(event) == {"id": "1", "url": "https://example.com"}

    def test_decodes_utf8_content(self) -> None:
        event = _event(json.dumps({"title": "Café"}, ensure_ascii=False).encode("utf-8"))
        assert decode_event(event)["title"] == "Café"

    def test_missing_data_raises(self) -> None:
        with pytest.raises(EventDecodeError):
            decode_event({})

    def test_invalid_base64_raises(self) -> None:
        with pytest.raises(EventDecodeError):
            decode_event({"data": "not base64!!"})

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(EventDecodeError):
            decode_event(_event(b"{not json"))

    def test_non_object_payload_raises(self) -> None:
        with pytest.raises(EventDecodeError):
            decode_event(_event(b"[1, 2, 3]"))


class TestEncodeEvent:
    def test_encoded_event_decodes_to_item(self) -> None:
        item = {"id": "1", "tags": ["a", "b"]}
        assert decode_event(encode_event(item)) == item
