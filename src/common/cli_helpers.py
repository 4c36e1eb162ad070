"""Common CLI helper utilities."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from common.config import get_settings
from common.serialization import serialize_item


def setup_logging() -> None:
    """Configure standard logging format for CLI tools and handlers."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def parse_tags(value: str | None) -> list[str]:
    """Parse a comma-separated --tags argument."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def save_jsonl_local(
    records: list[dict[str, Any]],
    prefix: str,
    output_dir: str = "output",
) -> Path:
    """Save items to a local JSONL file.

    Args:
        records: List of items to save.
        prefix: Filename prefix (e.g., "crawled_posts").
        output_dir: Directory to save to (default: "output").

    Returns:
        Path to the created file.
    """
    now = datetime.now(timezone.utc)
    output_path = Path(output_dir)
    output_path.mkdir(exist_ok=True)
    filename = f"{prefix}_{now.strftime('%Y_%m_%d_%H_%M')}.jsonl"
    filepath = output_path / filename
    with filepath.open("w") as f:
        for record in records:
            f.write(serialize_item(record).decode("utf-8") + "\n")
    return filepath
