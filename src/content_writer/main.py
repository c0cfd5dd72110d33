"""CLI entry point for post generation.

Usage:
    python -m src.content_writer.main --slug nextjs-seo-guide --prompt "Beginner guide, 1500 words"
    python -m src.content_writer.main --slug nextjs-seo-guide --prompt "..." --provider openai --save
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from src.cms import PostService
from src.common.config import DATA_EXPORTS_DIR, Settings
from src.common.errors import PSCMSError
from src.common.logging import setup_logging
from src.post_store import PostStore

from .models import LLMProvider, WriterConfig
from .writer import ContentWriter

logger = setup_logging(module_name="content_writer.main")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate an SEO blog post")
    parser.add_argument("--slug", required=True, help="URL slug, e.g. nextjs-seo-guide")
    parser.add_argument("--prompt", required=True, help="Instructions for the article")
    parser.add_argument(
        "--output",
        type=Path,
        help="Output path for the generated markdown",
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in LLMProvider],
        default=None,
        help="LLM provider (default: from settings, groq)",
    )
    parser.add_argument("--model", default="", help="Model override")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the post to Supabase after generating",
    )

    args = parser.parse_args()
    settings = Settings.load()

    config = WriterConfig(
        provider=LLMProvider(args.provider or settings.llm.provider),
        model=args.model,
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
    )
    service = PostService(
        writer=ContentWriter(config=config, settings=settings),
        store=PostStore(table=settings.supabase.posts_table),
    )

    try:
        draft = service.generate_draft(args.slug, args.prompt)
    except PSCMSError as e:
        logger.error("Generation failed: %s", e)
        sys.exit(1)

    output_path = args.output or DATA_EXPORTS_DIR / f"{draft.slug}.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(draft.content)
    logger.info("Markdown written to: %s", output_path)

    print(f"\nTitle: {draft.title}")
    print(f"Words: {draft.word_count}")
    for keyword, density in draft.keyword_density.items():
        print(f"  {keyword:<30} {density:6.2f}%")
    print(f"Markdown: {output_path}")

    if args.save:
        try:
            record = service.publish(draft)
        except PSCMSError as e:
            logger.error("Save failed: %s", e)
            sys.exit(1)
        print(f"Saved post: {record.id}")


if __name__ == "__main__":
    main()
