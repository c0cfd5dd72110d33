"""Content Writer — LLM-powered SEO article generation from a slug and brief.

The writer formats the slug into a title seed, embeds it with the operator's
brief into a fixed JSON-output instruction, calls the LLM once and parses the
reply into a GenerationResult. Nothing is retried: a failed call surfaces
immediately as a GenerationError subclass.

Usage:
    writer = ContentWriter()
    result = writer.generate_post("nextjs-seo-guide", "Beginner friendly, 1500 words")
    # result.title, result.content, result.keywords
"""

from __future__ import annotations

import json
from typing import Any

from src.common.config import Settings, get_groq_api_key, get_openai_api_key
from src.common.errors import (
    EmptyResponseError,
    GenerationServiceError,
    MalformedResponseError,
)
from src.common.logging import setup_logging
from src.common.models import GenerationRequest, GenerationResult

from .models import LLMProvider, WriterConfig
from .prompts import KEYWORD_COUNT, build_instruction, format_title_seed

logger = setup_logging(module_name="content_writer")


class ContentWriter:
    """Generates SEO articles through a single chat completion call.

    Credentials are resolved when the first call is made, so constructing a
    writer never touches the network; a missing API key raises
    ConfigurationError at that point.
    """

    def __init__(
        self,
        config: WriterConfig | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or Settings.load()
        self.config = config or WriterConfig(
            provider=LLMProvider(self.settings.llm.provider),
            temperature=self.settings.llm.temperature,
            max_tokens=self.settings.llm.max_tokens,
        )
        self._client = None

    @property
    def model(self) -> str:
        if self.config.model:
            return self.config.model
        if self.config.provider == LLMProvider.GROQ:
            return self.settings.llm.groq_model
        return self.settings.llm.openai_model

    def generate_post(self, slug: str, brief: str) -> GenerationResult:
        """Generate a title, markdown body and keyword list for a post.

        Args:
            slug: URL slug, e.g. "nextjs-seo-guide"
            brief: Free-text instructions for the article

        Returns:
            GenerationResult parsed from the LLM reply

        Raises:
            InputValidationError: slug or brief missing (no LLM call made)
            GenerationServiceError: the LLM call failed
            EmptyResponseError: the LLM returned no text
            MalformedResponseError: the LLM reply is not JSON
        """
        request = GenerationRequest.create(slug, brief)

        title_seed = format_title_seed(request.slug)
        instruction = build_instruction(title_seed, request.brief)

        logger.info("Generating post for slug '%s' (model=%s)", request.slug, self.model)
        response_text = self._call_llm(instruction)
        result = self.parse_response(response_text, title_seed)

        logger.info(
            "Post generated: %s (%d chars, %d keywords)",
            result.title,
            len(result.content),
            len(result.keywords),
        )
        return result

    # --- LLM Integration ---

    def _get_client(self):
        """Lazy-initialize the OpenAI SDK client for the configured provider."""
        if self._client is not None:
            return self._client

        import openai

        if self.config.provider == LLMProvider.GROQ:
            api_key = self.config.api_key or get_groq_api_key()
            self._client = openai.OpenAI(
                api_key=api_key,
                base_url=self.settings.llm.groq_base_url,
            )
        else:
            api_key = self.config.api_key or get_openai_api_key()
            self._client = openai.OpenAI(api_key=api_key)
        return self._client

    def _call_llm(self, instruction: str) -> str:
        """Send the instruction as the system message and return the reply text.

        Args:
            instruction: Full instruction from build_instruction()

        Returns:
            Raw reply text (expected to be a JSON object)
        """
        client = self._get_client()

        request_args: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": instruction},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        if self.config.json_mode:
            request_args["response_format"] = {"type": "json_object"}

        try:
            response = client.chat.completions.create(**request_args)
        except Exception as e:
            logger.error("LLM request failed (%s): %s", self.config.provider.value, e)
            raise GenerationServiceError(
                f"Content generation request failed: {e}"
            ) from e

        content = None
        if response.choices:
            content = response.choices[0].message.content

        if not content:
            logger.error("LLM returned no content (model=%s)", self.model)
            raise EmptyResponseError("No content generated from the LLM")

        return content

    # --- Response Parsing ---

    def parse_response(self, response_text: str, title_seed: str) -> GenerationResult:
        """Parse the LLM reply JSON into a GenerationResult.

        Missing or mistyped fields fall back to defaults instead of failing
        the request: title -> title_seed, content -> "", keywords -> [].
        The keyword count is not enforced.

        Args:
            response_text: Raw LLM reply (should contain a JSON object)
            title_seed: Fallback title

        Returns:
            GenerationResult

        Raises:
            MalformedResponseError: reply is not valid JSON
        """
        try:
            data = self._load_json(response_text)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse LLM response as JSON: %s", e)
            logger.debug("Raw response:\n%s", response_text[:500])
            raise MalformedResponseError(f"LLM returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            logger.warning(
                "LLM response is JSON %s, not an object; using defaults",
                type(data).__name__,
            )
            data = {}

        title = data.get("title")
        if not title or not isinstance(title, str):
            logger.warning("Response has no title, using '%s'", title_seed)
            title = title_seed

        content = data.get("content")
        if not isinstance(content, str):
            logger.warning("Response has no markdown content")
            content = ""

        keywords_raw = data.get("keywords")
        if isinstance(keywords_raw, list):
            # null entries would otherwise become the keyword "None"
            keywords = [str(k) for k in keywords_raw if k is not None]
            if len(keywords) != len(keywords_raw):
                logger.warning(
                    "Dropped %d null keyword(s) from response",
                    len(keywords_raw) - len(keywords),
                )
        else:
            logger.warning("Response has no keyword list")
            keywords = []

        if keywords and len(keywords) != KEYWORD_COUNT:
            logger.info(
                "Expected %d keywords, got %d; keeping them as-is",
                KEYWORD_COUNT,
                len(keywords),
            )

        return GenerationResult(title=title, content=content, keywords=keywords)

    @staticmethod
    def _load_json(response_text: str):
        """Decode the reply. A code fence is stripped only when it wraps the whole reply."""
        text = response_text.strip()
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            if not text.startswith("```"):
                raise

        body = text[3:]
        if body.startswith("json"):
            body = body[4:]
        if body.rstrip().endswith("```"):
            body = body.rstrip()[:-3]
        return json.loads(body.strip())
