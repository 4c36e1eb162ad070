"""Enrich posts with page metadata and decide whether to publish them."""

import logging
import re
from typing import Any, Mapping, Optional

from common.event_bus import EventBus
from common.events import decode_event
from common.serialization import serialize_item
from crawl_posts.fixes import apply_publication_fixes
from crawl_posts.meta import convert_meta_to_schema, format_meta
from crawl_posts.models import CrawlDecision, ScrapeResult, ScrapeStatus
from crawl_posts.scrape import PageNotFoundError, fetch_page, scrape_meta
from crawl_posts.tags import TagTables, normalize_tags

logger = logging.getLogger(__name__)

CRAWLED_POST_TOPIC = "crawled-post"
MAX_TITLE_LENGTH = 255

# Medium appends ?source=rss... to feed links
RSS_SOURCE_PATTERN = re.compile(r"\?source=rss.*")


def strip_rss_source(url: str) -> str:
    """Remove the ?source=rss tracking suffix from a URL."""
    return RSS_SOURCE_PATTERN.sub("", url)


def extract_meta(publication_id: str, url: str) -> dict:
    """Fetch the page and return its formatted, publication-fixed metadata."""
    page = fetch_page(url)
    meta = format_meta(scrape_meta(page.html, page.url))
    return apply_publication_fixes(publication_id, url, meta)


def _fits_title(title: Any) -> bool:
    return isinstance(title, str) and 0 < len(title) < MAX_TITLE_LENGTH


def merge_meta(item: Mapping[str, Any], meta: Mapping[str, Any]) -> dict:
    """
    Merge schema-mapped metadata into the post.

    The post's own title wins when it fits the length cap; otherwise the
    scraped title is used if it fits, and the title is dropped if neither
    does. The post's own tags win when non-empty; scraped tags fill in
    otherwise.
    """
    merged = {**item, **meta}

    if _fits_title(item.get("title")):
        merged["title"] = item["title"]
    elif not _fits_title(meta.get("title")):
        merged.pop("title", None)

    if item.get("tags"):
        merged["tags"] = item["tags"]

    return merged


def enrich_post(item: dict) -> ScrapeResult:
    """
    Fetch and merge page metadata into a post.

    A missing page (404) drops the post. Any other failure keeps the
    original post so it can still be published unenriched.
    """
    item_id = item.get("id")
    url = item["url"]
    try:
        meta = convert_meta_to_schema(extract_meta(item.get("publicationId"), url))
    except PageNotFoundError:
        logger.info("[%s] post doesn't exist anymore %s", item_id, url)
        return ScrapeResult(status=ScrapeStatus.NOT_FOUND, item=None)
    except Exception as e:
        logger.warning("[%s] failed to scrape %s: %s", item_id, url, e)
        return ScrapeResult(status=ScrapeStatus.DEGRADED, item=item, error=e)

    return ScrapeResult(status=ScrapeStatus.ENRICHED, item=merge_meta(item, meta))


def suppression_reason(item: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Return why a post must not be published, or None if it can be."""
    if item is None:
        return "missing"
    if item.get("paid") is True:
        return "paid"
    if item.get("isMediumComment") is True and "medium.com" in (item.get("url") or ""):
        return "medium comment"
    # Non-English content is not filtered; language detection is disabled.
    if "sponsored" in (item.get("tags") or []):
        return "sponsored"
    return None


def crawl_post(item: dict, tables: Optional[TagTables] = None) -> CrawlDecision:
    """Run a decoded post through enrichment, tag normalization and filters."""
    item = {**item, "url": strip_rss_source(item["url"])}
    logger.info("[%s] scraping %s to enrich", item.get("id"), item["url"])

    result = enrich_post(item)
    if result.item is None:
        return CrawlDecision(item=None, publish=False, reason="missing")

    post = {
        **result.item,
        "tags": normalize_tags(result.item.get("tags"), result.item.get("publicationId"), tables),
    }

    reason = suppression_reason(post)
    if reason:
        logger.info("[%s] %s content is ignored", post.get("id"), reason)
        return CrawlDecision(item=post, publish=False, reason=reason)

    return CrawlDecision(item=post, publish=True)


def handle_crawl_event(
    event: Mapping[str, Any],
    bus: Optional[EventBus] = None,
    tables: Optional[TagTables] = None,
) -> CrawlDecision:
    """
    Handle one inbound post event end to end.

    Decode and publish failures are not caught.
    """
    data = decode_event(event)
    decision = crawl_post(data, tables)

    if decision.publish:
        if bus is None:
            bus = EventBus()
        logger.info("[%s] crawled post", data.get("id"))
        bus.publish(CRAWLED_POST_TOPIC, serialize_item(decision.item))

    return decision
