"""Save pipeline: validate, dedupe, fetch, classify, name and persist.

Each call to ``SaveOrchestrator.save_one`` walks one URL through

    validate -> normalize -> check duplicate -> fetch -> classify
    -> generate filename -> persist

and returns exactly one of SaveSuccess, SaveDuplicate or SaveFailure.
Expected problems (bad URL, HTTP error, timeout, write failure) become a
SaveFailure; anything else propagates to the caller.
"""

import logging
from typing import Callable, Optional

from .config import ARTICLES_DIR, Config
from .duplicate import find_duplicate
from .exceptions import FetchError, FetchTimeoutError, ValidationError
from .fetcher import fetch_article
from .filenames import generate_filename
from .formatter import (
    DEFAULT_TAG,
    PARTIAL_NOTE,
    PARTIAL_WARNING,
    build_frontmatter,
    format_article,
)
from .keywords import extract_keywords
from .metadata import extract_metadata
from .models import (
    AddResult,
    BatchResult,
    FetchResult,
    SaveDuplicate,
    SaveFailure,
    SaveResult,
    SaveSuccess,
)
from .normalize import (
    DEFAULT_POLICY,
    UrlPolicy,
    extract_domain,
    fetch_target,
    normalize_url,
    validate_url,
)
from .queue_file import add_to_queue, read_queue, write_queue
from .summarize import summarize_content
from .writer import write_document

logger = logging.getLogger(__name__)

KEYWORD_COUNT = 5

FetchFn = Callable[[str, Config], FetchResult]
SummarizeFn = Callable[[str, str, Config], Optional[str]]


def parse_tags(raw: Optional[str]) -> Optional[list[str]]:
    """Split a comma-separated tag override into lowercase, trimmed tags.

    Returns None when nothing usable was given.
    """
    if not raw:
        return None
    tags = []
    for part in raw.split(","):
        tag = part.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags or None


class SaveOrchestrator:
    """Runs single saves and queue batches against one vault."""

    def __init__(
        self,
        config: Config,
        fetch: Optional[FetchFn] = None,
        summarize: Optional[SummarizeFn] = None,
        policy: UrlPolicy = DEFAULT_POLICY,
        tags: Optional[list[str]] = None,
        dry_run: bool = False,
    ):
        self.config = config
        self._fetch = fetch or fetch_article
        self._summarize = summarize or summarize_content
        self._policy = policy
        self.tags = tags
        self.dry_run = dry_run

    @property
    def vault_path(self):
        return self.config.vault_path

    def save_one(self, url: str) -> SaveResult:
        """Save a single URL into the vault."""
        try:
            target = fetch_target(url, self._policy)
        except ValidationError as e:
            logger.info("Rejected %s: %s", url, e)
            return SaveFailure(error=f"Invalid URL format: {e}", url=url)

        normalized = normalize_url(url, self._policy)
        if not normalized:
            return SaveFailure(error="Could not normalize URL", url=url)
        domain = extract_domain(normalized)

        existing = find_duplicate(normalized, self.vault_path)
        if existing:
            logger.info("Already saved: %s -> %s", normalized, existing.file)
            return SaveDuplicate(
                existing_file=f"{ARTICLES_DIR}/{existing.file}",
                existing_title=existing.title,
                url=normalized,
            )

        logger.info("Fetching %s", target)
        try:
            fetched = self._fetch(target, self.config)
        except FetchTimeoutError:
            return SaveFailure(error="Request timed out", url=normalized)
        except FetchError as e:
            return SaveFailure(error=f"Network error: {e}", url=normalized)

        if not fetched.success:
            if fetched.partial:
                return self._save_partial(normalized, domain, fetched)
            return SaveFailure(
                error=fetched.error or "Fetch failed",
                url=normalized,
            )

        return self._save_complete(normalized, domain, fetched)

    def _save_complete(self, normalized: str, domain: str, fetched: FetchResult) -> SaveResult:
        metadata = extract_metadata(fetched, normalized)
        title = metadata.title or domain
        content = fetched.article.content

        keywords = extract_keywords(content, KEYWORD_COUNT)
        tags = self.tags or keywords or [DEFAULT_TAG]
        summary = self._summarize(content, title, self.config)

        generated = generate_filename(title, domain, self.vault_path)
        frontmatter = build_frontmatter(
            url=normalized,
            title=title,
            source=metadata.source,
            tags=tags,
            status="complete",
            author=metadata.author,
            published=metadata.published,
            summary=summary,
        )
        document = format_article(frontmatter, title, content)

        result = SaveSuccess(
            file=f"{ARTICLES_DIR}/{generated.filename}",
            title=title,
            author=metadata.author,
            source=metadata.source,
            published=metadata.published,
            keywords=keywords,
            tags=tags,
            status="complete",
            url=normalized,
            summary=summary,
        )
        return self._persist(generated.filepath, document, result)

    def _save_partial(self, normalized: str, domain: str, fetched: FetchResult) -> SaveResult:
        """Keep what metadata there is when the body could not be extracted.

        Keyword tags are skipped since there is no usable text.
        """
        meta = fetched.meta
        title = meta.og_title or meta.title_tag or meta.h1 or domain
        tags = self.tags or [DEFAULT_TAG]

        generated = generate_filename(title, domain, self.vault_path)
        frontmatter = build_frontmatter(
            url=normalized,
            title=title,
            source=domain,
            tags=tags,
            status="partial",
            warning=PARTIAL_WARNING,
        )
        document = format_article(frontmatter, title, PARTIAL_NOTE)

        result = SaveSuccess(
            file=f"{ARTICLES_DIR}/{generated.filename}",
            title=title,
            source=domain,
            tags=tags,
            status="partial",
            url=normalized,
        )
        logger.info("Saving partial content for %s: %s", normalized, fetched.error)
        return self._persist(generated.filepath, document, result)

    def _persist(self, filepath, document: str, result: SaveSuccess) -> SaveResult:
        if self.dry_run:
            result.dry_run = True
            return result
        try:
            write_document(filepath, document)
        except OSError as e:
            logger.error("Failed to write %s: %s", filepath, e)
            return SaveFailure(error=f"Failed to write file: {e}", url=result.url)
        logger.info("Saved %s", result.file)
        return result

    def enqueue(self, url: str) -> AddResult:
        """Validate a URL and add it, as given, to the queue."""
        try:
            validate_url(url, self._policy)
        except ValidationError as e:
            return AddResult(added=False, reason=f"Invalid URL format: {e}")
        return add_to_queue(self.vault_path, url)

    def process_queue(self) -> BatchResult:
        """Save every queued URL in order; keep only the failures queued.

        Items are handled one at a time. An unexpected exception stops the
        batch and leaves the queue file as it was. A dry run never rewrites
        the queue.
        """
        items = read_queue(self.vault_path)
        batch = BatchResult()
        failed = []

        for index, item in enumerate(items, start=1):
            logger.info("[%d/%d] %s", index, len(items), item.url)
            result = self.save_one(item.url)
            batch.results.append(result)
            if isinstance(result, SaveFailure):
                failed.append(item)

        if items and not self.dry_run:
            write_queue(self.vault_path, failed)
        return batch
