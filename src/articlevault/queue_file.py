"""File-backed queue of URLs to save later.

The queue lives in ``Articles/.queue.json`` as a JSON list of
``{"url": ..., "added": ...}`` objects. Every write goes through a temp
file and a rename, so a crash never leaves a half-written queue behind.
There is no locking: one process is expected to own the vault at a time.
"""

import json
import logging
from pathlib import Path

from .config import ARTICLES_DIR
from .models import AddResult, QueueItem
from .writer import atomic_write_text

logger = logging.getLogger(__name__)

QUEUE_FILENAME = ".queue.json"


def queue_path(vault_path: Path) -> Path:
    return Path(vault_path) / ARTICLES_DIR / QUEUE_FILENAME


def read_queue(vault_path: Path) -> list[QueueItem]:
    """Return the queued items, or an empty list if the file is missing or bad."""
    path = queue_path(vault_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return []
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable queue file %s: %s", path, e)
        return []

    if not isinstance(data, list):
        logger.warning("Ignoring queue file %s: expected a list", path)
        return []

    items = []
    for entry in data:
        if isinstance(entry, dict) and isinstance(entry.get("url"), str):
            added = entry.get("added")
            if isinstance(added, str):
                items.append(QueueItem(url=entry["url"], added=added))
            else:
                items.append(QueueItem(url=entry["url"]))
    return items


def add_to_queue(vault_path: Path, url: str) -> AddResult:
    """Append a URL unless the exact same string is already queued."""
    items = read_queue(vault_path)
    if any(item.url == url for item in items):
        return AddResult(added=False, reason="Already in queue")
    items.append(QueueItem(url=url))
    _persist(vault_path, items)
    logger.debug("Queued %s (%d item(s) pending)", url, len(items))
    return AddResult(added=True)


def write_queue(vault_path: Path, items: list[QueueItem]) -> None:
    """Replace the queue contents. An empty list removes the file."""
    if not items:
        clear_queue(vault_path)
        return
    _persist(vault_path, items)


def clear_queue(vault_path: Path) -> None:
    try:
        queue_path(vault_path).unlink()
    except FileNotFoundError:
        pass


def _persist(vault_path: Path, items: list[QueueItem]) -> None:
    path = queue_path(vault_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps([item.to_dict() for item in items], indent=2)
    atomic_write_text(path, payload + "\n")
