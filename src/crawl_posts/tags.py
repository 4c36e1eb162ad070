"""Tag normalization: synonyms, ignore list and per-publication tags."""

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from common.config import ConfigSingleton, get_settings, load_yaml

logger = logging.getLogger(__name__)


# Alias -> canonical tag. Canonical tags must already be in normalized form.
TAG_SYNONYMS = {
    "js": "javascript",
    "es6": "javascript",
    "ecmascript": "javascript",
    "ts": "typescript",
    "reactjs": "react",
    "react.js": "react",
    "vuejs": "vue",
    "vue.js": "vue",
    "angularjs": "angular",
    "node.js": "nodejs",
    "node": "nodejs",
    "golang": "go",
    "k8s": "kubernetes",
    "ml": "machine-learning",
    "machinelearning": "machine-learning",
    "deeplearning": "deep-learning",
    "ai": "artificial-intelligence",
    "py": "python",
    "python3": "python",
    "css3": "css",
    "html5": "html",
    "web-development": "webdev",
    "web-dev": "webdev",
    "postgres": "postgresql",
    "aws-lambda": "serverless",
    "dev-ops": "devops",
}

IGNORED_TAGS = (
    "uncategorized",
    "general",
    "blog",
    "news",
    "featured",
    "tech",
    "technology",
    "programming",
    "software",
    "development",
    "posts",
    "articles",
)

PUBLICATION_TAGS = {
    "addy": ["javascript", "webdev"],
    "bair": ["machine-learning", "artificial-intelligence"],
    "css-tricks": ["css", "webdev"],
    "golang": ["go"],
    "k8s": ["kubernetes"],
    "node": ["nodejs"],
    "react": ["react", "javascript"],
    "vue": ["vue", "javascript"],
}


@dataclass(frozen=True)
class TagTables:
    """Immutable lookup tables used by normalize_tags."""
    synonyms: Mapping[str, str]
    ignored: frozenset
    publications: Mapping[str, tuple]

    @classmethod
    def from_dict(cls, data: Mapping) -> "TagTables":
        return cls(
            synonyms=MappingProxyType(dict(data.get("synonyms") or {})),
            ignored=frozenset(data.get("ignored") or ()),
            publications=MappingProxyType(
                {pub: tuple(tags) for pub, tags in (data.get("publications") or {}).items()}
            ),
        )


DEFAULT_TAG_TABLES = TagTables.from_dict(
    {
        "synonyms": TAG_SYNONYMS,
        "ignored": IGNORED_TAGS,
        "publications": PUBLICATION_TAGS,
    }
)


def load_tag_tables() -> TagTables:
    """Load tag tables from TAG_TABLES_PATH, falling back to the built-in tables."""
    path = get_settings().tag_tables_path
    if not path:
        return DEFAULT_TAG_TABLES
    logger.info("Loading tag tables from %s", path)
    return TagTables.from_dict(load_yaml(Path(path)))


_tag_tables = ConfigSingleton(load_tag_tables)
get_tag_tables = _tag_tables.get
set_tag_tables = _tag_tables.set
reset_tag_tables = _tag_tables.reset


def canonicalize_tag(tag: str) -> str:
    """Lowercase, cut at the first '&', strip and hyphenate spaces."""
    return tag.lower().split("&")[0].strip().replace(" ", "-")


def normalize_tags(
    tags: Optional[Iterable[str]],
    publication_id: Optional[str],
    tables: Optional[TagTables] = None,
) -> list[str]:
    """
    Normalize raw tags for a publication.

    Tags are canonicalized, mapped through the synonym table and filtered
    against the ignore list. Tags configured for the publication are appended
    as-is. Duplicates are dropped, keeping first-seen order.
    """
    if tables is None:
        tables = get_tag_tables()

    normalized = []
    for tag in tags or []:
        canonical = canonicalize_tag(tag)
        canonical = tables.synonyms.get(canonical, canonical)
        if canonical and canonical not in tables.ignored:
            normalized.append(canonical)

    normalized.extend(tables.publications.get(publication_id, ()))
    return list(dict.fromkeys(normalized))
