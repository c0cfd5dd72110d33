# Content Writer — LLM writer producing SEO articles as JSON
"""
Content Writer module for generating SEO articles from a slug and a brief.

The writer sends one fixed instruction to an OpenAI-compatible chat
completions API (Groq by default) and parses the JSON reply into a
title, a markdown body and a keyword list.
"""

from .models import LLMProvider, WriterConfig
from .prompts import INSTRUCTION_TEMPLATE, build_instruction, format_title_seed
from .writer import ContentWriter

__all__ = [
    "ContentWriter",
    "LLMProvider",
    "WriterConfig",
    "INSTRUCTION_TEMPLATE",
    "build_instruction",
    "format_title_seed",
]
