"""Fetch a post page and scrape its structured metadata."""

import logging
import re
from dataclasses import dataclass
from typing import Optional

import requests
from trafilatura.utils import load_html
from trafilatura.metadata import extract_metadata

from common.config import get_settings

logger = logging.getLogger(__name__)

READ_TIME_PATTERN = re.compile(r"(\d+)\s*min")

# Metadata the generic extractor does not cover, first match wins.
META_RULES = {
    "modified": [
        '//meta[@property="article:modified_time"]/@content',
        '//meta[@property="og:updated_time"]/@content',
        '//meta[@itemprop="dateModified"]/@content',
    ],
    "readTime": [
        '//meta[@name="twitter:data1"]/@value',
        '//meta[@name="twitter:data1"]/@content',
    ],
    "paid": [
        '//meta[@property="article:content_tier"]/@content',
    ],
    "isMediumComment": [
        '//meta[@name="medium:response"]/@content',
    ],
}


class PageFetchError(Exception):
    """Raised when a page cannot be fetched."""

    def __init__(self, url: str, status_code: Optional[int] = None):
        super().__init__(f"Failed to fetch {url} (status {status_code})")
        self.url = url
        self.status_code = status_code


class PageNotFoundError(PageFetchError):
    """Raised when a page no longer exists (HTTP 404)."""

    def __init__(self, url: str):
        super().__init__(url, 404)


@dataclass
class FetchedPage:
    html: str
    url: str


def fetch_page(url: str) -> FetchedPage:
    """Fetch a page, following redirects; the final URL is returned with the body."""
    settings = get_settings()
    response = requests.get(
        url,
        timeout=settings.request_timeout,
        headers={"User-Agent": settings.user_agent},
    )
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        if response.status_code == 404:
            raise PageNotFoundError(url) from exc
        raise PageFetchError(url, response.status_code) from exc
    return FetchedPage(html=response.text, url=response.url)


def _first(tree, xpaths: list[str]) -> Optional[str]:
    for xpath in xpaths:
        values = [v.strip() for v in tree.xpath(xpath) if v and v.strip()]
        if values:
            return values[0]
    return None


def _parse_read_time(value: Optional[str]) -> Optional[dict]:
    if not value:
        return None
    match = READ_TIME_PATTERN.search(value)
    if not match:
        return None
    return {"text": value, "duration": int(match.group(1))}


def _parse_keywords(tree) -> list[str]:
    tags = [t.strip() for t in tree.xpath('//meta[@property="article:tag"]/@content') if t.strip()]
    if tags:
        return tags
    keywords = _first(tree, ['//meta[@name="keywords"]/@content'])
    if not keywords:
        return []
    return [k.strip() for k in keywords.split(",") if k.strip()]


def scrape_meta(html: str, url: str) -> dict:
    """
    Scrape structured metadata from page HTML.

    Returns a mapping with the generic fields (date, url, image, title,
    keywords) and the rule fields (modified, readTime, paid,
    isMediumComment). paid and isMediumComment are the strings "true" or
    "false".

    Raises:
        ValueError: If the HTML cannot be parsed.
    """
    # load_html copes with XML declarations that lxml refuses on str input
    tree = load_html(html)
    if tree is None:
        raise ValueError(f"Unparseable HTML for {url}")

    keywords = _parse_keywords(tree)
    meta = {
        "modified": _first(tree, META_RULES["modified"]),
        "readTime": _parse_read_time(_first(tree, META_RULES["readTime"])),
    }

    tier = (_first(tree, META_RULES["paid"]) or "").lower()
    meta["paid"] = "true" if tier in ("locked", "metered") else "false"

    response = (_first(tree, META_RULES["isMediumComment"]) or "").lower()
    meta["isMediumComment"] = "true" if response == "true" else "false"

    document = extract_metadata(tree, default_url=url)
    meta["date"] = document.date if document else None
    meta["url"] = (document.url if document else None) or url
    meta["image"] = document.image if document else None
    meta["title"] = document.title if document else None

    if not keywords and document:
        keywords = list(document.tags or []) + list(document.categories or [])
    meta["keywords"] = keywords

    return {key: value for key, value in meta.items() if value is not None}
