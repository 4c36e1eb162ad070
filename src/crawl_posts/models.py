"""Data models for crawl_posts pipeline stage."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScrapeStatus(str, Enum):
    """Outcome of the fetch-and-scrape step."""
    ENRICHED = "enriched"
    DEGRADED = "degraded"
    NOT_FOUND = "not_found"


@dataclass
class ScrapeResult:
    """Post after the fetch-and-scrape step; item is None when the page is gone."""
    status: ScrapeStatus
    item: Optional[dict]
    error: Optional[Exception] = None


@dataclass
class CrawlDecision:
    """Final decision for a post: publish it, or suppress it with a reason."""
    item: Optional[dict]
    publish: bool
    reason: Optional[str] = None
