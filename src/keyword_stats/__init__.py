# Keyword Stats — word count and keyword density for post content
"""
Keyword statistics for generated and edited posts.

Density is recomputed from the current content every time it changes;
values are never carried over from a previous revision.
"""

from .calculator import compute_stats, count_words, tokenize

__all__ = [
    "compute_stats",
    "count_words",
    "tokenize",
]
