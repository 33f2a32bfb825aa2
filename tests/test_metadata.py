"""Tests for metadata derivation, keyword extraction and formatting."""

from datetime import date

from articlevault.duplicate import read_header, read_header_field
from articlevault.formatter import build_frontmatter, format_article
from articlevault.keywords import extract_keywords
from articlevault.metadata import clean_author, derive_source, extract_metadata, parse_date

from .conftest import make_article_result


class TestExtractMetadata:
    def test_prefers_article_fields(self):
        result = make_article_result(
            title="Real Title",
            byline="By  Jane   Doe",
            og_title="OG Title",
            og_published="2025-03-04T10:00:00Z",
            og_site_name="Example Weekly",
        )
        meta = extract_metadata(result, "https://example.com/a")

        assert meta.title == "Real Title"
        assert meta.author == "Jane Doe"
        assert meta.source == "Example Weekly"
        assert meta.published == "2025-03-04"

    def test_title_fallbacks(self):
        result = make_article_result(title=None, byline=None, title_tag="Tag Title", h1="H1")
        meta = extract_metadata(result, "https://example.com/a")
        assert meta.title == "Tag Title"
        assert meta.author is None

    def test_source_uses_final_url(self):
        result = make_article_result(final_url="https://www.nytimes.com/2026/a.html")
        assert extract_metadata(result, "https://nyti.ms/x").source == "New York Times"


class TestHelpers:
    def test_derive_source_known_subdomain(self):
        assert derive_source("https://en.wikipedia.org/wiki/X") == "Wikipedia"

    def test_derive_source_fallback(self):
        assert derive_source("https://blog.example.com/post") == "Example"
        assert derive_source("https://example.co.uk/") == "Example"

    def test_derive_source_unknown(self):
        assert derive_source("garbage") == "Unknown"

    def test_clean_author(self):
        assert clean_author("by Tom &amp; Jerry&#8203;") == "Tom & Jerry"
        assert clean_author("   ") is None

    def test_parse_date(self):
        assert parse_date("2024-02-29") == "2024-02-29"
        assert parse_date("2024-02-29T23:00:00+00:00") == "2024-02-29"
        assert parse_date("not a date") is None
        assert parse_date("2023-02-30") is None
        assert parse_date(None) is None


class TestKeywords:
    def test_frequency_order_without_stop_words(self):
        text = (
            "Rust compilers and rust tooling. Compilers compile rust code. "
            "The tooling around compilers is good and the code is fast."
        )
        assert extract_keywords(text, 3) == ["rust", "compilers", "tooling"]

    def test_ignores_markdown_noise(self):
        text = (
            "![diagram](https://img.example.com/diagram.png) "
            "[kubernetes](https://k8s.io) clusters ```python\nimport kubernetes\n``` "
            "clusters schedule pods; clusters scale."
        )
        keywords = extract_keywords(text, 2)
        assert keywords == ["clusters", "kubernetes"]
        assert "https" not in extract_keywords(text, 10)

    def test_short_text(self):
        assert extract_keywords("too short") == []

    def test_custom_stop_words(self):
        text = "alpha beta alpha beta alpha gamma " * 3
        assert extract_keywords(text, 1, stop_words=frozenset({"alpha"})) == ["beta"]


class TestFormatter:
    def test_frontmatter_round_trips_through_header_reader(self):
        fm = build_frontmatter(
            url="https://example.com/a",
            title='Say "hi"',
            source="Example",
            tags=["python", "packaging"],
            author="Jane",
            published="2025-01-02",
            saved=date(2026, 2, 15),
        )
        header = read_header(fm + "\n")

        assert read_header_field(header, "url") == "https://example.com/a"
        assert read_header_field(header, "title") == 'Say "hi"'
        assert read_header_field(header, "saved") == "2026-02-15"
        assert read_header_field(header, "status") == "complete"
        assert '  - "python"' in fm
        assert "warning" not in fm

    def test_defaults_for_missing_fields(self):
        fm = build_frontmatter(url="https://x.com/", title=None, source=None, tags=[])
        assert 'title: "Untitled"' in fm
        assert 'source: "Unknown"' in fm
        assert '  - "untagged"' in fm
        assert "author" not in fm

    def test_partial_warning(self):
        fm = build_frontmatter(
            url="https://x.com/", title="T", source="x.com", status="partial", warning="careful"
        )
        assert "status: partial" in fm
        assert 'warning: "careful"' in fm

    def test_format_article(self):
        doc = format_article("---\nurl: x\n---", "Title", "\nBody\n\n")
        assert doc == "---\nurl: x\n---\n\n# Title\n\nBody\n"
