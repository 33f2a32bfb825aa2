"""Firecrawl SDK wrapper for fetching a single article."""

import logging
import re
from typing import Optional

from firecrawl import FirecrawlApp

from .config import Config
from .exceptions import FetchError, FetchTimeoutError
from .models import FetchedArticle, FetchResult, PageMeta

logger = logging.getLogger(__name__)

_HTTP_ERROR_MESSAGES = {
    400: "Bad request (400)",
    401: "Authentication required (401)",
    403: "Access denied (403)",
    404: "Page not found (404)",
    410: "Page removed (410)",
    429: "Rate limited, try again later",
    500: "Server error (500)",
    502: "Bad gateway (502)",
    503: "Service unavailable (503)",
}


def http_error_message(status: int) -> str:
    """Human-readable message for an HTTP error status."""
    return _HTTP_ERROR_MESSAGES.get(status, f"HTTP error ({status})")


def _to_dict(obj) -> dict:
    """Convert a Firecrawl response object (pydantic model or dict) to a dict."""
    if obj is None:
        return {}
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "dict"):
        return obj.dict()
    return obj if isinstance(obj, dict) else {}


def _first(metadata: dict, *keys: str) -> Optional[str]:
    """Return the first non-empty string value among keys."""
    for key in keys:
        value = metadata.get(key)
        if isinstance(value, list):
            value = value[0] if value else None
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _first_heading(markdown: str) -> Optional[str]:
    match = re.search(r"^#\s+(.+)$", markdown, re.MULTILINE)
    return match.group(1).strip() if match else None


def _page_meta(metadata: dict, markdown: str) -> PageMeta:
    return PageMeta(
        og_title=_first(metadata, "og_title", "ogTitle", "og:title"),
        og_author=_first(metadata, "author", "og_author", "article:author"),
        og_published=_first(
            metadata,
            "published_time",
            "publishedTime",
            "article:published_time",
            "datePublished",
            "date",
        ),
        og_site_name=_first(metadata, "og_site_name", "ogSiteName", "og:site_name"),
        h1=_first_heading(markdown),
        title_tag=_first(metadata, "title"),
        time_datetime=_first(metadata, "dc_date", "dc_terms_created", "dc_date_created"),
    )


def _is_timeout(error: Exception) -> bool:
    if isinstance(error, TimeoutError):
        return True
    return "timeout" in type(error).__name__.lower() or "timed out" in str(error).lower()


def fetch_article(url: str, config: Config) -> FetchResult:
    """Fetch one URL and return its main content as markdown.

    HTTP errors and pages with too little readable text come back as an
    unsuccessful FetchResult. Transport failures raise.

    Raises:
        FetchTimeoutError: the request did not finish within config.fetch_timeout.
        FetchError: any other failure talking to the remote side.
    """
    config.require_firecrawl()
    app = FirecrawlApp(api_key=config.firecrawl_api_key)

    try:
        result = app.scrape(
            url,
            formats=["markdown"],
            only_main_content=True,
            timeout=int(config.fetch_timeout * 1000),
        )
    except Exception as e:
        if _is_timeout(e):
            raise FetchTimeoutError(f"Timed out fetching {url}") from e
        raise FetchError(f"Failed to fetch {url}: {e}") from e

    if not result:
        raise FetchError(f"Empty response from Firecrawl for {url}")

    markdown = result.markdown if hasattr(result, "markdown") else result.get("markdown", "")
    markdown = markdown or ""
    metadata_obj = result.metadata if hasattr(result, "metadata") else result.get("metadata", {})
    metadata = _to_dict(metadata_obj)

    status = metadata.get("status_code") or metadata.get("statusCode")
    final_url = _first(metadata, "url", "source_url", "sourceURL")
    meta = _page_meta(metadata, markdown)

    if isinstance(status, int) and status >= 400:
        logger.debug("Fetch of %s returned HTTP %s", url, status)
        return FetchResult(
            success=False,
            status=status,
            final_url=final_url,
            meta=meta,
            error=http_error_message(status),
        )

    if len(markdown.strip()) < config.min_content_length:
        logger.debug("Fetch of %s yielded %d chars of content", url, len(markdown.strip()))
        return FetchResult(
            success=False,
            status=status,
            final_url=final_url,
            meta=meta,
            error="No content could be extracted",
            partial=bool(markdown.strip()),
        )

    return FetchResult(
        success=True,
        status=status,
        final_url=final_url,
        article=FetchedArticle(
            title=meta.title_tag or meta.og_title or meta.h1,
            byline=meta.og_author,
            content=markdown,
            excerpt=_first(metadata, "description", "og_description"),
        ),
        meta=meta,
    )
