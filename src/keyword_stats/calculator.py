"""Keyword statistics — word count and per-keyword density.

Tokenization is a plain whitespace split of the lower-cased text:
punctuation stays attached to words, and leading or trailing whitespace
yields an empty token at that end. Empty content therefore counts as one
token, which keeps the density division safe and matches the values
already stored for existing posts.

Usage:
    stats = compute_stats(content, ["seo", "nextjs"])
    stats.word_count, stats.keyword_density
"""

from __future__ import annotations

import logging
import re

from src.common.models import KeywordDensity, PostStats

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(content: str) -> list[str]:
    """Lower-case content and split it on runs of whitespace."""
    return _WHITESPACE_RE.split(content.lower())


def count_words(content: str) -> int:
    """Number of whitespace-delimited tokens (1 for empty content)."""
    return len(tokenize(content))


def compute_stats(content: str, keywords: list[str]) -> PostStats:
    """Compute word count and keyword density for post content.

    Each keyword is matched case-insensitively against whole tokens only,
    so "seo," does not count toward "seo". Density is the share of tokens
    matching the keyword, in percent.

    Args:
        content: Markdown body of the post
        keywords: Keyword list in display order; a repeated keyword
            keeps a single entry

    Returns:
        PostStats with one density entry per keyword, in keyword order
    """
    words = tokenize(content)
    word_count = len(words)

    keyword_density: KeywordDensity = {}
    for keyword in keywords:
        keyword_lower = keyword.lower()
        count = sum(1 for word in words if word == keyword_lower)
        keyword_density[keyword] = (count / word_count) * 100

    logger.debug(
        "Computed stats: %d words, %d keywords", word_count, len(keyword_density)
    )
    return PostStats(word_count=word_count, keyword_density=keyword_density)
