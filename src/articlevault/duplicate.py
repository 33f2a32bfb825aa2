"""Duplicate detection by scanning the ``url`` field of saved articles.

Only the YAML header of each file is looked at, and only through
``read_header_field``, so the ad hoc line matching can be swapped for a real
YAML parser later without touching callers.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from .config import ARTICLES_DIR
from .models import DuplicateMatch

logger = logging.getLogger(__name__)

HEADER_DELIMITER = "---"

# The header is expected near the top; do not read whole articles.
_HEADER_READ_LIMIT = 16_384


def read_header(text: str) -> Optional[str]:
    """Return the text between the first and second ``---`` lines."""
    match = re.match(r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", text, re.DOTALL)
    if not match:
        return None
    return match.group(1)


def read_header_field(header: str, name: str) -> Optional[str]:
    """Return a scalar field from a header block, with quotes stripped."""
    match = re.search(rf"^{re.escape(name)}:[ \t]*(.+?)[ \t]*$", header, re.MULTILINE)
    if not match:
        return None
    value = match.group(1)
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
        if match.group(1)[0] == '"':
            value = value.replace('\\"', '"').replace("\\\\", "\\")
    return value or None


def _read_file_header(md_file: Path) -> Optional[str]:
    with open(md_file, encoding="utf-8", errors="replace") as fh:
        head = fh.read(_HEADER_READ_LIMIT)
    return read_header(head)


def find_duplicate(normalized_url: str, vault_path: Path) -> Optional[DuplicateMatch]:
    """Find a saved article whose header ``url`` equals normalized_url.

    The stored value is compared as-is; it was normalized when written.
    Files are visited in name order, and the first match wins.
    """
    articles_dir = Path(vault_path) / ARTICLES_DIR
    if not articles_dir.is_dir():
        return None

    for md_file in sorted(articles_dir.glob("*.md")):
        try:
            header = _read_file_header(md_file)
        except OSError as e:
            logger.debug("Skipping unreadable file %s: %s", md_file.name, e)
            continue
        if header is None:
            continue

        if read_header_field(header, "url") == normalized_url:
            return DuplicateMatch(
                file=md_file.name,
                title=read_header_field(header, "title"),
                filepath=md_file,
            )

    return None
