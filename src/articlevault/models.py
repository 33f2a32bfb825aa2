"""Data models for articlevault."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union


@dataclass
class QueueItem:
    """A URL waiting in the on-disk queue."""

    url: str
    added: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        return {"url": self.url, "added": self.added}


@dataclass
class AddResult:
    """Outcome of adding a URL to the queue."""

    added: bool
    reason: Optional[str] = None


@dataclass
class PageMeta:
    """Page-level metadata recovered during a fetch, even when extraction fails."""

    og_title: Optional[str] = None
    og_author: Optional[str] = None
    og_published: Optional[str] = None
    og_site_name: Optional[str] = None
    h1: Optional[str] = None
    title_tag: Optional[str] = None
    time_datetime: Optional[str] = None


@dataclass
class FetchedArticle:
    """Readable content extracted from a page."""

    title: Optional[str]
    byline: Optional[str]
    content: str  # markdown
    excerpt: Optional[str] = None


@dataclass
class FetchResult:
    """Result of fetching one URL.

    On success ``article`` is populated. On failure ``error`` describes the
    problem; ``partial`` is set when the page loaded but yielded too little
    readable text, in which case ``meta`` may still be useful.
    """

    success: bool
    status: Optional[int] = None
    final_url: Optional[str] = None
    article: Optional[FetchedArticle] = None
    meta: PageMeta = field(default_factory=PageMeta)
    error: Optional[str] = None
    partial: bool = False


@dataclass
class ArticleMetadata:
    title: Optional[str]
    author: Optional[str]
    source: str
    published: Optional[str]


@dataclass
class DuplicateMatch:
    """An existing vault document whose url matches."""

    file: str
    title: Optional[str]
    filepath: Path


@dataclass
class GeneratedFilename:
    filename: str
    filepath: Path


@dataclass
class SaveSuccess:
    """An article was written (or would be, on a dry run)."""

    file: str
    title: str
    source: str
    tags: list[str]
    status: str  # complete or partial
    url: str
    author: Optional[str] = None
    published: Optional[str] = None
    keywords: list[str] = field(default_factory=list)
    summary: Optional[str] = None
    dry_run: bool = False

    def to_dict(self) -> dict:
        data = {
            "success": True,
            "file": self.file,
            "title": self.title,
            "source": self.source,
            "tags": self.tags,
            "status": self.status,
            "url": self.url,
        }
        if self.author:
            data["author"] = self.author
        if self.published:
            data["published"] = self.published
        if self.keywords:
            data["keywords"] = self.keywords
        if self.summary:
            data["summary"] = self.summary
        if self.dry_run:
            data["dry_run"] = True
        return data


@dataclass
class SaveDuplicate:
    """The URL is already stored in the vault."""

    existing_file: str
    url: str
    existing_title: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": False,
            "duplicate": True,
            "existing_file": self.existing_file,
            "existing_title": self.existing_title,
            "url": self.url,
        }


@dataclass
class SaveFailure:
    """The save attempt failed; the item is eligible for a later retry."""

    error: str
    url: str

    def to_dict(self) -> dict:
        return {"success": False, "error": self.error, "url": self.url}


SaveResult = Union[SaveSuccess, SaveDuplicate, SaveFailure]


@dataclass
class BatchResult:
    """Summary of one pass over the queue."""

    results: list = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if isinstance(r, SaveSuccess))

    @property
    def duplicates(self) -> int:
        return sum(1 for r in self.results if isinstance(r, SaveDuplicate))

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if isinstance(r, SaveFailure))

    def to_dict(self) -> dict:
        return {
            "success": True,
            "processed": self.processed,
            "succeeded": self.succeeded,
            "duplicates": self.duplicates,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }
