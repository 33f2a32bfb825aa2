"""Derive article metadata (title, author, source, date) from fetch results."""

import re
from datetime import datetime
from typing import Optional

from .models import ArticleMetadata, FetchResult
from .normalize import extract_domain

KNOWN_SOURCES = {
    "nytimes.com": "New York Times",
    "washingtonpost.com": "Washington Post",
    "theguardian.com": "The Guardian",
    "arstechnica.com": "Ars Technica",
    "techcrunch.com": "TechCrunch",
    "theverge.com": "The Verge",
    "wired.com": "Wired",
    "bbc.com": "BBC",
    "bbc.co.uk": "BBC",
    "reuters.com": "Reuters",
    "apnews.com": "Associated Press",
    "bloomberg.com": "Bloomberg",
    "forbes.com": "Forbes",
    "cnbc.com": "CNBC",
    "cnn.com": "CNN",
    "x.com": "X (Twitter)",
    "twitter.com": "X (Twitter)",
    "github.com": "GitHub",
    "medium.com": "Medium",
    "substack.com": "Substack",
    "reddit.com": "Reddit",
    "stackoverflow.com": "Stack Overflow",
    "dev.to": "DEV Community",
    "news.ycombinator.com": "Hacker News",
    "arxiv.org": "arXiv",
    "nature.com": "Nature",
    "science.org": "Science",
    "wikipedia.org": "Wikipedia",
    "youtube.com": "YouTube",
}

_GENERIC_LABELS = {"com", "org", "net", "io", "co", "uk", "ai", "dev", "app"}


def extract_metadata(fetch_result: FetchResult, original_url: str) -> ArticleMetadata:
    """Pick the best title, author, source and published date available."""
    article = fetch_result.article
    meta = fetch_result.meta

    title = (
        (article.title if article else None)
        or meta.og_title
        or meta.title_tag
        or meta.h1
    )
    author = clean_author((article.byline if article else None) or meta.og_author)
    source = derive_source(fetch_result.final_url or original_url, meta.og_site_name)
    published = parse_date(meta.og_published or meta.time_datetime)

    return ArticleMetadata(title=title, author=author, source=source, published=published)


def clean_author(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    cleaned = re.sub(r"^by\s+", "", raw.strip(), flags=re.IGNORECASE)
    cleaned = cleaned.replace("&amp;", "&")
    cleaned = re.sub(r"&#\d+;", "", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned or None


def derive_source(url: str, site_name: Optional[str] = None) -> str:
    """Name the publication: og:site_name, a known outlet, or the domain label.

    ``blog.example.com`` and ``example.co.uk`` both become ``Example``.
    """
    if site_name:
        return site_name

    domain = extract_domain(url)
    if not domain:
        return "Unknown"

    for key, name in KNOWN_SOURCES.items():
        if domain == key or domain.endswith("." + key):
            return name

    parts = domain.split(".")
    meaningful = [p for p in parts if p not in _GENERIC_LABELS and len(p) > 2]
    name = meaningful[-1] if meaningful else parts[0]
    return name[:1].upper() + name[1:]


def parse_date(raw: Optional[str]) -> Optional[str]:
    """Parse an ISO-ish date string into YYYY-MM-DD, or None."""
    if not raw:
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        pass
    match = re.match(r"(\d{4})-(\d{2})-(\d{2})", text)
    if match:
        try:
            return datetime(*(int(g) for g in match.groups())).date().isoformat()
        except ValueError:
            return None
    return None
