"""Instruction prompt for SEO article generation.

The instruction is a fixed contract with the LLM: it must always ask for a
single JSON object with `title`, `content` and `keywords`, because the
response parser assumes JSON.
"""

INSTRUCTION_TEMPLATE = """\
You are a professional content writer specializing in SEO-optimized articles.
Create a comprehensive article about "{title_seed}" based on the following instructions: {brief}.

Respond with a JSON object that strictly follows this format:
{{
  "title": "Your SEO-optimized title here",
  "content": "Your markdown-formatted content here with proper headings, paragraphs, and formatting",
  "keywords": ["keyword1", "keyword2", "keyword3", "keyword4", "keyword5"]
}}

The content should be well-structured with proper markdown headings, paragraphs, and formatting.
The keywords should be relevant for SEO purposes and limited to exactly {keyword_count} items."""

KEYWORD_COUNT = 5


def format_title_seed(slug: str) -> str:
    """Turn a URL slug into a human-readable title seed.

    Each hyphen-delimited segment gets its first character upper-cased and
    the segments are joined with single spaces. Empty segments from
    consecutive hyphens are kept, so "a--b" becomes "A  B".

    Example:
        >>> format_title_seed("nextjs-seo-guide")
        'Nextjs Seo Guide'
    """
    return " ".join(segment[:1].upper() + segment[1:] for segment in slug.split("-"))


def build_instruction(title_seed: str, brief: str) -> str:
    """Build the system instruction for one article.

    Args:
        title_seed: Human-readable topic from format_title_seed()
        brief: Operator's free-text instructions

    Returns:
        Instruction requesting a JSON object with title, content and
        exactly five keywords
    """
    return INSTRUCTION_TEMPLATE.format(
        title_seed=title_seed,
        brief=brief,
        keyword_count=KEYWORD_COUNT,
    )
