# Post Store — Supabase persistence for generated posts
from .store import DEFAULT_TABLE, PostStore

__all__ = [
    "DEFAULT_TABLE",
    "PostStore",
]
