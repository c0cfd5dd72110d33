"""Post Service — the post lifecycle behind the dashboard.

Pipeline:
1. generate_draft: slug + brief -> LLM -> GenerationResult -> keyword stats
2. edit_draft: replace draft content, recompute stats
3. publish: save the draft to the post store
4. update_content: edit a stored post, recompute stats from its keywords

Word count and keyword density are derived from the content every time it
changes; they are never accepted from the caller.
"""

from __future__ import annotations

from typing import Optional

from src.common.errors import InputValidationError
from src.common.logging import setup_logging
from src.common.models import PostDraft, PostMetadata, PostRecord
from src.content_writer import ContentWriter
from src.keyword_stats import compute_stats
from src.post_store import PostStore

logger = setup_logging(module_name="cms.service")


class PostService:
    """Coordinates content generation, keyword statistics and persistence."""

    def __init__(
        self,
        writer: ContentWriter | None = None,
        store: PostStore | None = None,
    ):
        self.writer = writer or ContentWriter()
        self.store = store or PostStore()

    # --- Drafts ---

    def generate_draft(self, slug: str, brief: str) -> PostDraft:
        """Generate a post and compute its stats. Nothing is persisted.

        Generation errors propagate unchanged; no stats are computed for a
        failed generation.
        """
        result = self.writer.generate_post(slug, brief)
        stats = compute_stats(result.content, result.keywords)

        return PostDraft(
            title=result.title,
            slug=slug.strip(),
            content=result.content,
            keywords=result.keywords,
            word_count=stats.word_count,
            keyword_density=stats.keyword_density,
            system_prompt=brief,
        )

    def edit_draft(self, draft: PostDraft, content: str) -> PostDraft:
        """Return a copy of the draft with new content and fresh stats."""
        if not content:
            raise InputValidationError("Content is required")
        stats = compute_stats(content, draft.keywords)
        return draft.model_copy(update={
            "content": content,
            "word_count": stats.word_count,
            "keyword_density": stats.keyword_density,
        })

    def refresh_stats(self, draft: PostDraft) -> PostDraft:
        """Recompute stats from the draft's own content and keywords."""
        stats = compute_stats(draft.content, draft.keywords)
        return draft.model_copy(update={
            "word_count": stats.word_count,
            "keyword_density": stats.keyword_density,
        })

    def publish(self, draft: PostDraft) -> PostRecord:
        """Save a draft as a new post."""
        if not draft.slug or not draft.title:
            raise InputValidationError("Title and slug are required")
        record = self.store.save(self.refresh_stats(draft))
        logger.info("Published post %s: %s", record.id, record.title)
        return record

    # --- Stored posts ---

    def update_content(self, post_id: str, content: str) -> PostRecord:
        """Replace a stored post's content and recompute its stats."""
        if not post_id:
            raise InputValidationError("Post ID is required")
        if not content:
            raise InputValidationError("Content is required")

        current = self.store.fetch_by_id(post_id)
        stats = compute_stats(content, current.keywords)
        return self.store.update(post_id, {
            "content": content,
            "word_count": stats.word_count,
            "keyword_density": stats.keyword_density,
        })

    def list_posts(self) -> list[PostRecord]:
        return self.store.fetch_all()

    def list_metadata(self) -> list[PostMetadata]:
        return [PostMetadata.from_record(post) for post in self.store.fetch_all()]

    def get_post(self, post_id: Optional[str]) -> PostRecord:
        if not post_id:
            raise InputValidationError("Post ID is required")
        return self.store.fetch_by_id(post_id)

    def delete_post(self, post_id: Optional[str]) -> bool:
        if not post_id:
            raise InputValidationError("Post ID is required")
        return self.store.delete(post_id)
