"""Map scraped page metadata onto the post schema."""

from typing import Any, Mapping

from common.datetime import parse_timestamp


def format_meta(meta: Mapping[str, Any]) -> dict:
    """Collapse readTime to its duration and paid/isMediumComment to booleans."""
    read_time = meta.get("readTime")
    return {
        **meta,
        "readTime": read_time.get("duration") if isinstance(read_time, Mapping) else None,
        "paid": meta.get("paid") == "true",
        "isMediumComment": meta.get("isMediumComment") == "true",
    }


def convert_meta_to_schema(meta: Mapping[str, Any]) -> dict:
    """
    Rename scraped fields to schema fields.

    date -> publishedAt, modified -> updatedAt (parsed timestamps, None when
    malformed), keywords -> tags. The source keys are always removed; every
    other key passes through unchanged.
    """
    obj = dict(meta)

    date = obj.pop("date", None)
    if date:
        obj["publishedAt"] = parse_timestamp(date)

    modified = obj.pop("modified", None)
    if modified:
        obj["updatedAt"] = parse_timestamp(modified)

    keywords = obj.pop("keywords", None)
    if keywords:
        obj["tags"] = keywords

    return obj
