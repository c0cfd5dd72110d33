"""Shared Pydantic data models for the PSCMS dashboard.

These models define the data contracts between the content writer,
the keyword statistics calculator, the post store and the dashboard.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .errors import InputValidationError


# Keyword -> percentage of tokens equal to that keyword.
KeywordDensity = dict[str, float]


class GenerationRequest(BaseModel):
    """A slug plus free-text brief, created per generation call."""
    slug: str
    brief: str

    @classmethod
    def create(cls, slug: Optional[str], brief: Optional[str]) -> GenerationRequest:
        """Build a request, rejecting missing or blank fields before any LLM call."""
        if not isinstance(slug, str) or not isinstance(brief, str):
            raise InputValidationError("Slug and prompt are required")
        if not slug.strip() or not brief.strip():
            raise InputValidationError("Slug and prompt are required")
        return cls(slug=slug.strip(), brief=brief)


class GenerationResult(BaseModel):
    """Parsed LLM output: title, markdown body and keyword list."""
    title: str
    content: str = ""
    keywords: list[str] = Field(default_factory=list)


class PostStats(BaseModel):
    """Word count and per-keyword density derived from post content."""
    word_count: int
    keyword_density: KeywordDensity = Field(default_factory=dict)


class PostDraft(BaseModel):
    """A generated post that has not been saved yet."""
    title: str
    slug: str
    content: str = ""
    keywords: list[str] = Field(default_factory=list)
    word_count: int = 0
    keyword_density: KeywordDensity = Field(default_factory=dict)
    system_prompt: Optional[str] = None

    def to_supabase_dict(self) -> dict:
        """Serialize for Supabase insert, omitting None values."""
        return self.model_dump(exclude_none=True)


class PostRecord(BaseModel):
    """A row of the Supabase `posts` table."""
    id: str
    title: str
    slug: str
    content: str = ""
    keywords: list[str] = Field(default_factory=list)
    created_at: str = ""
    word_count: int = 0
    keyword_density: KeywordDensity = Field(default_factory=dict)
    system_prompt: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # bigint primary keys come back as int
        return str(value)

    @field_validator("keywords", mode="before")
    @classmethod
    def _null_keywords(cls, value):
        return value or []

    @field_validator("keyword_density", mode="before")
    @classmethod
    def _null_density(cls, value):
        return value or {}


class PostMetadata(BaseModel):
    """Listing entry for the markdown API: everything but the body."""
    id: str
    title: str
    slug: str
    created_at: str
    word_count: int
    keywords: list[str]
    markdown_url: str

    @classmethod
    def from_record(cls, record: PostRecord) -> PostMetadata:
        return cls(
            id=record.id,
            title=record.title,
            slug=record.slug,
            created_at=record.created_at,
            word_count=record.word_count,
            keywords=record.keywords,
            markdown_url=f"/api/markdown/{record.id}",
        )
