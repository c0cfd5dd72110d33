"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .errors import ConfigurationError

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
DATA_EXPORTS_DIR = DATA_DIR / "exports"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class LLMSettings(BaseModel):
    """LLM API settings."""
    provider: str = "groq"
    groq_model: str = "llama-3.1-8b-instant"
    openai_model: str = "gpt-4o-mini"
    groq_base_url: str = GROQ_BASE_URL
    max_tokens: int = 4000
    temperature: float = 0.7


class SupabaseSettings(BaseModel):
    """Supabase datastore settings."""
    posts_table: str = "posts"


class ServerSettings(BaseModel):
    """Dashboard HTTP server settings."""
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False


class Settings(BaseModel):
    """Top-level application settings."""
    llm: LLMSettings = Field(default_factory=LLMSettings)
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()


def get_groq_api_key() -> str:
    """Get Groq API key from environment."""
    key = os.getenv("GROQ_API_KEY", "")
    if not key:
        raise ConfigurationError("GROQ_API_KEY not set in environment")
    return key


def get_openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv("OPENAI_API_KEY", "")
    if not key:
        raise ConfigurationError("OPENAI_API_KEY not set in environment")
    return key


def get_supabase_credentials() -> tuple[str, str]:
    """Get (url, anon key) for the Supabase project from environment.

    The NEXT_PUBLIC_* names are accepted so an existing dashboard .env
    works unchanged.
    """
    url = os.getenv("SUPABASE_URL", "") or os.getenv("NEXT_PUBLIC_SUPABASE_URL", "")
    key = os.getenv("SUPABASE_ANON_KEY", "") or os.getenv("NEXT_PUBLIC_SUPABASE_ANON_KEY", "")
    if not url or not key:
        raise ConfigurationError(
            "SUPABASE_URL / SUPABASE_ANON_KEY must be set in .env. "
            "See config/.env.example."
        )
    return url, key
