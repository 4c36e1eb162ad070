"""Datetime utilities."""

import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse a scraped date string leniently.

    Returns None when the value cannot be parsed instead of raising, so a bad
    date never costs us the rest of the metadata.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        logger.debug("Unparseable timestamp: %r", value)
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable timestamp: %r", value)
        return None
