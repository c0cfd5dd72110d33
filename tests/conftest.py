"""Shared test fixtures for the PSCMS dashboard."""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import Settings


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of any local config/settings.yaml."""
    return Settings()


@pytest.fixture
def sample_generation() -> dict:
    """A well-formed LLM reply as a dictionary."""
    return {
        "title": "The Complete Next.js SEO Guide",
        "content": (
            "# The Complete Next.js SEO Guide\n\n"
            "Nextjs makes seo simple.\n\n"
            "## Metadata\n\n"
            "Good metadata helps seo and nextjs sites rank."
        ),
        "keywords": ["nextjs", "seo", "metadata", "ranking", "sitemap"],
    }


@pytest.fixture
def sample_generation_json(sample_generation) -> str:
    """The LLM reply as raw JSON text."""
    return json.dumps(sample_generation)


@pytest.fixture
def post_row() -> dict:
    """A row as returned by the Supabase `posts` table."""
    return {
        "id": "0b6f2f5e-6a55-4a53-9a43-0e5c1f3f2a10",
        "title": "The Complete Next.js SEO Guide",
        "slug": "nextjs-seo-guide",
        "content": "seo is great seo",
        "keywords": ["seo", "great"],
        "created_at": "2026-10-01T09:30:00+00:00",
        "word_count": 4,
        "keyword_density": {"seo": 50.0, "great": 25.0},
        "system_prompt": "Beginner friendly",
    }


def make_completion(content):
    """Build a fake chat completion response carrying `content`."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture
def completion_factory():
    return make_completion
