"""Frequency-based keyword extraction, used as fallback tags."""

import re
from collections import Counter

STOP_WORDS = frozenset({
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i", "it", "for",
    "not", "on", "with", "he", "as", "you", "do", "at", "this", "but", "his", "by",
    "from", "they", "we", "say", "her", "she", "or", "an", "will", "my", "one",
    "all", "would", "there", "their", "what", "so", "up", "out", "if", "about",
    "who", "get", "which", "go", "me", "when", "make", "can", "like", "time", "no",
    "just", "him", "know", "take", "people", "into", "year", "your", "good",
    "some", "could", "them", "see", "other", "than", "then", "now", "look",
    "only", "come", "its", "over", "think", "also", "back", "after", "use", "two",
    "how", "our", "work", "first", "well", "way", "even", "new", "want",
    "because", "any", "these", "give", "day", "most", "us", "been", "has", "are",
    "was", "were", "did", "does", "being", "having", "doing", "should", "might",
    "must", "shall", "need", "dare", "ought", "used", "may", "very", "often",
    "however", "too", "usually", "really", "already", "still", "since",
    "another", "each", "every", "both", "few", "more", "such", "many", "much",
    "own", "same",
})

MIN_TEXT_LENGTH = 50


def _strip_markdown(text: str) -> str:
    text = re.sub(r"!\[.*?\]\(.*?\)", "", text)
    text = re.sub(r"\[([^\]]+)\]\(.*?\)", r"\1", text)
    text = re.sub(r"```.*?```", "", text, flags=re.DOTALL)
    text = re.sub(r"`[^`]+`", "", text)
    text = re.sub(r"#{1,6}\s+", "", text)
    text = re.sub(r"[*_~]+", "", text)
    return text


def extract_keywords(
    text: str,
    count: int = 5,
    stop_words: frozenset = STOP_WORDS,
) -> list[str]:
    """Return the ``count`` most frequent non-stop-words in text.

    Ties keep the order in which words first appear.
    """
    if not text or len(text) < MIN_TEXT_LENGTH:
        return []

    words = re.findall(r"[a-z]{3,}", _strip_markdown(text).lower())
    counts = Counter(word for word in words if word not in stop_words)
    return [word for word, _ in counts.most_common(count)]
