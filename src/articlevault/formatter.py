"""YAML frontmatter and article markdown formatting."""

from datetime import date
from typing import Optional

DEFAULT_TAG = "untagged"
PARTIAL_WARNING = "Content may be incomplete due to paywall or access restriction"
PARTIAL_NOTE = (
    "*Note: This article may be incomplete due to paywall or access restrictions.*"
)


def build_frontmatter(
    url: str,
    title: Optional[str],
    source: Optional[str],
    tags: Optional[list[str]] = None,
    status: str = "complete",
    author: Optional[str] = None,
    published: Optional[str] = None,
    warning: Optional[str] = None,
    summary: Optional[str] = None,
    saved: Optional[date] = None,
) -> str:
    """Generate the YAML header for a saved article.

    Required fields are always written; optional ones are omitted when empty.
    """
    saved = saved or date.today()
    tags = tags or [DEFAULT_TAG]

    lines = [
        "---",
        f"url: \"{_escape_yaml(url)}\"",
        f"saved: {saved.isoformat()}",
        f"title: \"{_escape_yaml(title or 'Untitled')}\"",
        f"source: \"{_escape_yaml(source or 'Unknown')}\"",
    ]
    if author:
        lines.append(f"author: \"{_escape_yaml(author)}\"")
    if published:
        lines.append(f"published: {published}")
    lines.append("tags:")
    for tag in tags:
        lines.append(f"  - \"{_escape_yaml(tag)}\"")
    lines.append(f"status: {status}")
    if warning:
        lines.append(f"warning: \"{_escape_yaml(warning)}\"")
    if summary:
        lines.append(f"summary: \"{_escape_yaml(summary)}\"")
    lines.append("---")
    return "\n".join(lines)


def format_article(frontmatter: str, title: str, body: str) -> str:
    """Format a complete document: header, title heading, body."""
    return f"{frontmatter}\n\n# {title}\n\n{body.strip()}\n"


def _escape_yaml(text: str) -> str:
    """Escape special characters for YAML double-quoted values."""
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\r", " ").replace("\n", " ")
    return text
