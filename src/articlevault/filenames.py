"""Filename generation for saved articles."""

import re
from datetime import date
from pathlib import Path
from typing import Optional

from .config import ARTICLES_DIR
from .models import GeneratedFilename

MAX_TITLE_LENGTH = 120
FALLBACK_TITLE = "Untitled Article"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_ILLEGAL_CHARS = re.compile(r'[/\\:*?"<>|]')


def readable_title(title: Optional[str]) -> str:
    """Clean a title for use as a human-readable filename.

    Returns an empty string when nothing usable is left.
    """
    if not title:
        return ""
    text = _CONTROL_CHARS.sub(" ", title)
    text = _ILLEGAL_CHARS.sub("-", text)
    text = re.sub(r"\s+", " ", text)
    text = text.strip().strip("-").strip()
    return text[:MAX_TITLE_LENGTH].rstrip()


def generate_filename(
    title: Optional[str],
    domain: Optional[str],
    vault_path: Path,
    today: Optional[date] = None,
) -> GeneratedFilename:
    """Pick a free ``Title (YYYY-MM-DD).md`` path under the Articles folder.

    Collisions get ``-2``, ``-3``, ... appended, checked against the files
    currently on disk.
    """
    today = today or date.today()
    base_title = readable_title(title) or readable_title(domain) or FALLBACK_TITLE
    basename = f"{base_title} ({today.isoformat()})"

    articles_dir = Path(vault_path) / ARTICLES_DIR
    filename = f"{basename}.md"
    counter = 2
    while (articles_dir / filename).exists():
        filename = f"{basename}-{counter}.md"
        counter += 1

    return GeneratedFilename(filename=filename, filepath=articles_dir / filename)
