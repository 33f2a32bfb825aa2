"""Shared fixtures for articlevault tests."""

from pathlib import Path

import pytest

from articlevault.config import Config
from articlevault.models import FetchedArticle, FetchResult, PageMeta

ARTICLE_BODY = (
    "Python packaging has changed a lot. Packaging tools now read pyproject "
    "files, and packaging metadata lives in one place. Python developers "
    "who maintain packaging pipelines benefit from fewer packaging surprises."
)


@pytest.fixture
def vault(tmp_path) -> Path:
    return tmp_path / "vault"


@pytest.fixture
def config(vault) -> Config:
    return Config(vault_path=vault, firecrawl_api_key="fc-test", summarize=False)


def make_article_result(
    title="Packaging in 2026",
    content=ARTICLE_BODY,
    byline="By Jane Doe",
    final_url=None,
    **meta,
) -> FetchResult:
    return FetchResult(
        success=True,
        status=200,
        final_url=final_url,
        article=FetchedArticle(title=title, byline=byline, content=content),
        meta=PageMeta(**meta),
    )


def make_error_result(status=404, error="Page not found (404)") -> FetchResult:
    return FetchResult(success=False, status=status, error=error)


def make_partial_result(**meta) -> FetchResult:
    return FetchResult(
        success=False,
        status=200,
        error="No content could be extracted",
        partial=True,
        meta=PageMeta(**meta),
    )


def write_article(vault: Path, filename: str, url: str, title: str = "Existing") -> Path:
    articles = vault / "Articles"
    articles.mkdir(parents=True, exist_ok=True)
    path = articles / filename
    path.write_text(
        f"---\nurl: {url}\nsaved: 2026-01-01\ntitle: \"{title}\"\n"
        f"source: Example\ntags:\n  - untagged\nstatus: complete\n---\n\n"
        f"# {title}\n\nBody text.\n",
        encoding="utf-8",
    )
    return path
