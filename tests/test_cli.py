"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from articlevault.cli import main
from articlevault.queue_file import read_queue

from .conftest import make_article_result, make_error_result


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def env(monkeypatch, tmp_path, vault):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ARTICLEVAULT_VAULT", str(vault))
    monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-test")
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("LLM_PROVIDER", raising=False)


@pytest.fixture
def fetch():
    with patch("articlevault.orchestrator.fetch_article") as fetch_mock:
        yield fetch_mock


def test_save_success_then_duplicate(runner, fetch):
    fetch.return_value = make_article_result()

    first = runner.invoke(main, ["save", "https://example.com/a"])
    second = runner.invoke(main, ["save", "https://example.com/a"])

    assert first.exit_code == 0
    assert "Saved:" in first.output
    assert 'Title:  "Packaging in 2026"' in first.output
    assert second.exit_code == 0
    assert "Already saved: Articles/Packaging in 2026" in second.output


def test_save_404_exits_1(runner, fetch):
    fetch.return_value = make_error_result(404)

    result = runner.invoke(main, ["save", "--json", "https://example.com/missing"])

    assert result.exit_code == 1
    data = json.loads(result.output)
    assert data["success"] is False
    assert data["error"] == "Page not found (404)"


def test_invalid_url_exits_1(runner, fetch):
    result = runner.invoke(main, ["save", "http://10.0.0.5/"])
    assert result.exit_code == 1
    assert "Invalid URL format" in result.output
    fetch.assert_not_called()


def test_missing_url(runner):
    result = runner.invoke(main, ["save"])
    assert result.exit_code == 1
    assert "No URL provided" in result.output


def test_json_success_and_tags(runner, fetch, vault):
    fetch.return_value = make_article_result()

    result = runner.invoke(main, ["save", "--json", "--tags", "Python, Tools", "https://example.com/a"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["success"] is True
    assert data["tags"] == ["python", "tools"]
    assert data["status"] == "complete"
    assert (vault / data["file"]).exists()


def test_dry_run(runner, fetch, vault):
    fetch.return_value = make_article_result()

    result = runner.invoke(main, ["save", "--dry-run", "https://example.com/a"])

    assert result.exit_code == 0
    assert "[DRY RUN] Would save:" in result.output
    assert not (vault / "Articles").exists()


def test_queue_and_process(runner, fetch, vault):
    fetch.side_effect = lambda url, config: (
        make_article_result() if url.endswith("/good") else make_error_result(503, "Service unavailable (503)")
    )

    assert runner.invoke(main, ["save", "--queue", "https://example.com/bad"]).exit_code == 0
    queued = runner.invoke(main, ["save", "--queue", "https://example.com/good"])
    assert "Queued: https://example.com/good" in queued.output

    again = runner.invoke(main, ["save", "--queue", "https://example.com/good"])
    assert again.exit_code == 1
    assert "Already in queue" in again.output

    result = runner.invoke(main, ["save", "--process-queue", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert (data["processed"], data["succeeded"], data["failed"], data["duplicates"]) == (2, 1, 1, 0)
    assert [item.url for item in read_queue(vault)] == ["https://example.com/bad"]


def test_process_empty_queue(runner):
    result = runner.invoke(main, ["save", "--process-queue"])
    assert result.exit_code == 0
    assert "Queue is empty" in result.output


def test_unexpected_error_exits_1(runner, fetch):
    fetch.side_effect = RuntimeError("kaboom")

    result = runner.invoke(main, ["save", "https://example.com/a"])

    assert result.exit_code == 1
    assert "Unexpected error: kaboom" in result.output


def test_missing_firecrawl_key_exits_2(runner, monkeypatch):
    monkeypatch.delenv("FIRECRAWL_API_KEY")
    result = runner.invoke(main, ["save", "https://example.com/a"])
    assert result.exit_code == 2
    assert "FIRECRAWL_API_KEY" in result.output
