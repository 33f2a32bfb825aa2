"""Best-effort article summaries via the configured LLM provider."""

import logging
from typing import Optional

from .config import Config
from .llm import get_llm_provider

logger = logging.getLogger(__name__)

MAX_SUMMARY_INPUT = 6000


def _prompt(content: str, title: str) -> str:
    return (
        "Summarize this article in 2-3 concise sentences. Focus on the key "
        "takeaway and why it matters. Be direct, with no filler phrases like "
        "\"This article discusses\" or \"The author explains.\"\n\n"
        f"Title: {title}\n\n"
        "Content:\n"
        f"{content[:MAX_SUMMARY_INPUT]}"
    )


def summarize_content(content: str, title: str, config: Config) -> Optional[str]:
    """Return a short summary, or None if summaries are off or the call fails."""
    if not config.summaries_enabled or not content:
        return None

    try:
        llm = get_llm_provider(config)
        summary = llm.generate(_prompt(content, title), max_output_tokens=200)
    except Exception as e:  # noqa: BLE001
        logger.warning("Summary failed for %r: %s", title, e)
        return None

    summary = " ".join(summary.split())
    return summary or None
