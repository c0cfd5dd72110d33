"""Post Store — CRUD for generated posts in the Supabase `posts` table.

Expected table schema:
    id uuid primary key default gen_random_uuid(),
    title text, slug text, content text, keywords text[],
    created_at timestamptz default now(),
    word_count int, keyword_density jsonb, system_prompt text

Usage:
    from src.post_store import PostStore

    store = PostStore()
    record = store.save(draft)
    posts = store.fetch_all()  # newest first
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from src.common.config import get_supabase_credentials
from src.common.errors import ConfigurationError, PostNotFoundError, PostStoreError
from src.common.models import PostDraft, PostRecord

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "posts"

# Columns the dashboard is allowed to change on an existing post.
UPDATABLE_COLUMNS = frozenset({
    "title",
    "slug",
    "content",
    "keywords",
    "word_count",
    "keyword_density",
    "system_prompt",
})


class PostStore:
    """Reads and writes PostRecords through the Supabase client.

    Credentials default to SUPABASE_URL / SUPABASE_ANON_KEY (or their
    NEXT_PUBLIC_* equivalents) and are checked when the client is first
    needed.
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        table: str = DEFAULT_TABLE,
    ):
        self._supabase_url = supabase_url or ""
        self._supabase_key = supabase_key or ""
        self._table = table
        self._client = None  # Lazy init

    def _get_client(self):
        """Lazy-initialize Supabase client."""
        if self._client is not None:
            return self._client
        if not self._supabase_url or not self._supabase_key:
            try:
                url, key = get_supabase_credentials()
            except ConfigurationError:
                logger.error("Supabase credentials missing")
                raise
            self._supabase_url = self._supabase_url or url
            self._supabase_key = self._supabase_key or key

        from supabase import create_client

        self._client = create_client(self._supabase_url, self._supabase_key)
        logger.info("Connected to Supabase: %s", self._supabase_url)
        return self._client

    def _posts(self):
        return self._get_client().table(self._table)

    # --- CRUD ---

    def save(self, draft: PostDraft) -> PostRecord:
        """Insert a new post and return the stored row."""
        data = draft.to_supabase_dict()
        try:
            result = self._posts().insert(data).execute()
        except Exception as e:
            logger.error("Error creating post %s: %s", draft.slug, e)
            raise PostStoreError(f"Failed to create post: {e}") from e

        if not result.data:
            raise PostStoreError(f"Insert returned no row for slug '{draft.slug}'")
        record = PostRecord(**result.data[0])
        logger.info("Created post %s (%s)", record.id, record.slug)
        return record

    def update(self, post_id: str, updates: dict[str, Any]) -> PostRecord:
        """Update columns of an existing post and return the stored row."""
        unknown = set(updates) - UPDATABLE_COLUMNS
        if unknown:
            raise PostStoreError(f"Cannot update column(s): {', '.join(sorted(unknown))}")

        try:
            result = self._posts().update(updates).eq("id", post_id).execute()
        except Exception as e:
            logger.error("Error updating post %s: %s", post_id, e)
            raise PostStoreError(f"Failed to update post: {e}") from e

        if not result.data:
            raise PostNotFoundError(f"Post not found: {post_id}")
        logger.info("Updated post %s (%s)", post_id, ", ".join(sorted(updates)))
        return PostRecord(**result.data[0])

    def fetch_by_id(self, post_id: str) -> PostRecord:
        """Fetch a single post by id."""
        try:
            result = self._posts().select("*").eq("id", post_id).limit(1).execute()
        except Exception as e:
            logger.error("Error fetching post %s: %s", post_id, e)
            raise PostStoreError(f"Failed to fetch post: {e}") from e

        if not result.data:
            raise PostNotFoundError(f"Post not found: {post_id}")
        return PostRecord(**result.data[0])

    def fetch_all(self) -> list[PostRecord]:
        """Fetch every post, newest first."""
        try:
            result = (
                self._posts()
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error("Error fetching posts: %s", e)
            raise PostStoreError(f"Failed to fetch posts: {e}") from e

        return [PostRecord(**row) for row in result.data or []]

    def delete(self, post_id: str) -> bool:
        """Delete a post by id. Returns True on success."""
        try:
            self._posts().delete().eq("id", post_id).execute()
        except Exception as e:
            logger.error("Error deleting post %s: %s", post_id, e)
            raise PostStoreError(f"Failed to delete post: {e}") from e

        logger.info("Deleted post %s", post_id)
        return True
