"""Data models for the content writer module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LLMProvider(str, Enum):
    """Supported LLM providers (both speak the OpenAI chat completions API)."""
    GROQ = "groq"
    OPENAI = "openai"


@dataclass
class WriterConfig:
    """Configuration for the content writer."""
    provider: LLMProvider = LLMProvider.GROQ
    model: str = ""  # Empty = use default from settings
    temperature: float = 0.7
    max_tokens: int = 4000
    json_mode: bool = True
    api_key: str = ""  # Empty = read from environment
