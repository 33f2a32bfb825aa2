"""CLI entry point for articlevault."""

import json
import logging
import sys

import click

from .config import load_config
from .exceptions import ConfigError
from .models import BatchResult, SaveDuplicate, SaveFailure
from .orchestrator import SaveOrchestrator, parse_tags


def _setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("articlevault")
    logger.handlers = []
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _emit_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _print_result(result) -> None:
    """Human-readable output for a single save result."""
    if isinstance(result, SaveDuplicate):
        click.echo(f"Already saved: {result.existing_file}")
        if result.existing_title:
            click.echo(f"Title: \"{result.existing_title}\"")
        return

    if isinstance(result, SaveFailure):
        click.echo(f"Error: {result.error}", err=True)
        return

    click.echo("[DRY RUN] Would save:" if result.dry_run else "Saved:")
    click.echo(f"  File:   {result.file}")
    click.echo(f"  Title:  \"{result.title}\"")
    if result.author:
        click.echo(f"  Author: {result.author}")
    click.echo(f"  Source: {result.source}")
    if result.tags:
        click.echo(f"  Tags:   {', '.join(result.tags)}")
    click.echo(f"  Status: {result.status}")
    if result.summary:
        click.echo(f"  Summary: {result.summary}")


def _print_batch(batch: BatchResult) -> None:
    click.echo(
        f"Processed {batch.processed} queued articles: {batch.succeeded} saved, "
        f"{batch.duplicates} duplicates, {batch.failed} failed"
    )
    for result in batch.results:
        if isinstance(result, SaveFailure):
            click.echo(f"  Failed: {result.url} ({result.error})", err=True)


def _fail(message: str, as_json: bool, code: int = 1, **extra) -> None:
    if as_json:
        _emit_json({"success": False, "error": message, **extra})
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(code)


@click.group()
def main():
    """Archive web articles into an Obsidian vault."""


@main.command()
@click.argument("url", required=False)
@click.option(
    "--vault",
    "vault_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Vault root path (default: ARTICLEVAULT_VAULT env var or ~/obsidian-vault)",
)
@click.option(
    "--tags",
    type=str,
    default=None,
    help="Comma-separated tags, e.g. \"ai,ml,tutorial\" (default: extracted keywords)",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Output JSON")
@click.option("--queue", "queue_only", is_flag=True, default=False, help="Add URL to the queue for later")
@click.option("--process-queue", is_flag=True, default=False, help="Save all queued URLs")
@click.option("--dry-run", is_flag=True, default=False, help="Show what would be saved without writing")
@click.option("--no-summary", is_flag=True, default=False, help="Skip the LLM summary")
@click.option(
    "--provider",
    type=click.Choice(["claude", "openai"]),
    default=None,
    help="LLM provider for summaries (default: claude, or LLM_PROVIDER env var)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
def save(url, vault_path, tags, as_json, queue_only, process_queue, dry_run, no_summary, provider, verbose):
    """Save a web article to the vault.

    Example: articlevault save https://example.com/some-article
    """
    _setup_logging(verbose)

    try:
        config = load_config(
            vault_path=vault_path,
            provider=provider,
            summarize=False if no_summary else None,
            verbose=verbose,
        )
    except ConfigError as e:
        _fail(f"Configuration error: {e}", as_json, code=2)

    orchestrator = SaveOrchestrator(config, tags=parse_tags(tags), dry_run=dry_run)

    try:
        if process_queue:
            _run_process_queue(orchestrator, as_json)
        elif queue_only:
            _run_enqueue(orchestrator, url, as_json)
        else:
            _run_save(orchestrator, url, as_json)
    except ConfigError as e:
        _fail(f"Configuration error: {e}", as_json, code=2)
    except Exception as e:  # noqa: BLE001
        logging.getLogger("articlevault").debug("Unexpected error", exc_info=True)
        _fail(f"Unexpected error: {e}", as_json)


def _run_save(orchestrator: SaveOrchestrator, url, as_json: bool) -> None:
    if not url:
        _fail("No URL provided. Usage: articlevault save <url>", as_json)

    result = orchestrator.save_one(url)
    if as_json:
        _emit_json(result.to_dict())
    else:
        _print_result(result)
    sys.exit(1 if isinstance(result, SaveFailure) else 0)


def _run_enqueue(orchestrator: SaveOrchestrator, url, as_json: bool) -> None:
    if not url:
        _fail("No URL provided. Usage: articlevault save --queue <url>", as_json)

    added = orchestrator.enqueue(url)
    if not added.added:
        _fail(added.reason, as_json, url=url)

    if as_json:
        _emit_json({"success": True, "queued": True, "url": url, "message": "URL added to queue"})
    else:
        click.echo(f"Queued: {url}")
    sys.exit(0)


def _run_process_queue(orchestrator: SaveOrchestrator, as_json: bool) -> None:
    batch = orchestrator.process_queue()
    if batch.processed == 0:
        if as_json:
            _emit_json({"success": True, "processed": 0, "message": "Queue is empty"})
        else:
            click.echo("Queue is empty")
        sys.exit(0)

    if as_json:
        _emit_json(batch.to_dict())
    else:
        _print_batch(batch)
    sys.exit(0)
