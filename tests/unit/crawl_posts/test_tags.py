"""Tests for crawl_posts.tags module."""

import pytest

from crawl_posts.tags import (
    DEFAULT_TAG_TABLES,
    TagTables,
    canonicalize_tag,
    load_tag_tables,
    normalize_tags,
)
from common.config import Settings, reset_settings, set_settings

TABLES = TagTables.from_dict(
    {
        "synonyms": {"js": "javascript", "golang": "go"},
        "ignored": ["uncategorized", "news"],
        "publications": {"pubA": ["go", "backend"]},
    }
)


class TestCanonicalizeTag:
    def test_lowercases_and_hyphenates(self) -> None:
        assert canonicalize_tag("Machine Learning") == "machine-learning"

    def test_cuts_at_ampersand(self) -> None:
        assert canonicalize_tag("Tips & Tricks") == "tips"

    def test_strips_whitespace(self) -> None:
        assert canonicalize_tag("  Python  ") == "python"


class TestNormalizeTags:
    def test_applies_synonyms(self) -> None:
        assert normalize_tags(["JS", "Golang"], None, TABLES) == ["javascript", "go"]

    def test_drops_empty_and_ignored_tags(self) -> None:
        assert normalize_tags(["", " & more", "News", "rust"], None, TABLES) == ["rust"]

    def test_appends_publication_tags(self) -> None:
        assert normalize_tags(["rust"], "pubA", TABLES) == ["rust", "go", "backend"]

    def test_deduplicates_after_normalization(self) -> None:
        result = normalize_tags(["Go", "golang", "GO "], "pubA", TABLES)
        assert result == ["go", "backend"]

    def test_empty_input_returns_publication_tags(self) -> None:
        assert normalize_tags([], "pubA", TABLES) == ["go", "backend"]
        assert normalize_tags(None, "pubA", TABLES) == ["go", "backend"]

    def test_empty_input_unknown_publication(self) -> None:
        assert normalize_tags([], "unknown", TABLES) == []

    def test_publication_tags_bypass_ignore_list(self) -> None:
        tables = TagTables.from_dict(
            {"ignored": ["news"], "publications": {"daily": ["news"]}}
        )
        assert normalize_tags(["News"], "daily", tables) == ["news"]

    @pytest.mark.parametrize(
        "tags,publication_id",
        [
            (["JS", "Web Development", "Tips & Tricks", "uncategorized"], "addy"),
            (["ML", "Deep Learning", "AI", "ai"], "bair"),
            (["React.js", "  node  ", "Node.js", "K8s"], "react"),
            ([], "golang"),
            (["Programming", "", "CSS3"], "css-tricks"),
        ],
    )
    def test_default_tables_are_idempotent(self, tags, publication_id) -> None:
        once = normalize_tags(tags, publication_id, DEFAULT_TAG_TABLES)
        assert normalize_tags(once, publication_id, DEFAULT_TAG_TABLES) == once

    def test_default_tables_output_is_clean(self) -> None:
        result = normalize_tags(
            ["Blog", "JS", "javascript", "News", "Featured"], "addy", DEFAULT_TAG_TABLES
        )
        assert len(result) == len(set(result))
        assert not set(result) & DEFAULT_TAG_TABLES.ignored
        assert set(DEFAULT_TAG_TABLES.publications["addy"]) <= set(result)

    def test_default_synonym_targets_are_canonical(self) -> None:
        for target in DEFAULT_TAG_TABLES.synonyms.values():
            assert canonicalize_tag(target) == target
            assert target not in DEFAULT_TAG_TABLES.synonyms
            assert target not in DEFAULT_TAG_TABLES.ignored


class TestTagTables:
    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            TABLES.synonyms["ts"] = "typescript"

    def test_load_uses_defaults_without_path(self) -> None:
        set_settings(Settings(tag_tables_path=""))
        try:
            assert load_tag_tables() is DEFAULT_TAG_TABLES
        finally:
            reset_settings()

    def test_load_from_yaml(self, tmp_path) -> None:
        path = tmp_path / "tags.yaml"
        path.write_text(
            "synonyms:\n  js: javascript\n"
            "ignored:\n  - news\n"
            "publications:\n  pubA:\n    - go\n"
        )
        set_settings(Settings(tag_tables_path=str(path)))
        try:
            tables = load_tag_tables()
        finally:
            reset_settings()

        assert tables.synonyms["js"] == "javascript"
        assert "news" in tables.ignored
        assert tables.publications["pubA"] == ("go",)
