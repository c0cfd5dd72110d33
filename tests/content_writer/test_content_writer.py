"""Tests for the content_writer module.

Tests cover:
- Writer configuration and initialization
- Title seed formatting and instruction building
- Response parsing and field defaults
- Error taxonomy (service failure, empty reply, malformed JSON)
- End-to-end generation with a mocked LLM client
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.common.errors import (
    ConfigurationError,
    EmptyResponseError,
    GenerationError,
    GenerationServiceError,
    InputValidationError,
    MalformedResponseError,
)
from src.content_writer.models import LLMProvider, WriterConfig
from src.content_writer.prompts import (
    INSTRUCTION_TEMPLATE,
    build_instruction,
    format_title_seed,
)
from src.content_writer.writer import ContentWriter


# === Fixtures ===


@pytest.fixture
def writer(settings) -> ContentWriter:
    """Create a ContentWriter with default config."""
    return ContentWriter(settings=settings)


@pytest.fixture
def mock_client():
    return MagicMock()


@pytest.fixture
def connected_writer(writer, mock_client) -> ContentWriter:
    """Writer whose LLM client is a mock."""
    writer._client = mock_client
    return writer


# === Test: Models ===


class TestWriterConfig:
    def test_default_config(self):
        config = WriterConfig()
        assert config.provider == LLMProvider.GROQ
        assert config.temperature == 0.7
        assert config.max_tokens == 4000
        assert config.json_mode is True

    def test_writer_uses_settings(self, settings):
        settings.llm.temperature = 0.2
        writer = ContentWriter(settings=settings)
        assert writer.config.temperature == 0.2
        assert writer.model == "llama-3.1-8b-instant"

    def test_model_override(self, settings):
        writer = ContentWriter(
            config=WriterConfig(provider=LLMProvider.OPENAI, model="gpt-4o"),
            settings=settings,
        )
        assert writer.model == "gpt-4o"

    def test_openai_default_model(self, settings):
        writer = ContentWriter(
            config=WriterConfig(provider=LLMProvider.OPENAI),
            settings=settings,
        )
        assert writer.model == settings.llm.openai_model


# === Test: Prompts ===


class TestFormatTitleSeed:
    def test_capitalizes_each_segment(self):
        assert format_title_seed("nextjs-seo-guide") == "Nextjs Seo Guide"

    def test_single_segment(self):
        assert format_title_seed("python") == "Python"

    def test_keeps_rest_of_segment(self):
        assert format_title_seed("iPhone-tips") == "IPhone Tips"

    def test_empty_segments_pass_through(self):
        assert format_title_seed("seo--guide") == "Seo  Guide"

    def test_digits(self):
        assert format_title_seed("top-10-tools") == "Top 10 Tools"


class TestBuildInstruction:
    def test_embeds_seed_and_brief(self):
        prompt = build_instruction("Nextjs Seo Guide", "Write for beginners")
        assert '"Nextjs Seo Guide"' in prompt
        assert "Write for beginners" in prompt

    def test_requests_json_fields(self):
        prompt = build_instruction("Topic", "Brief")
        assert "JSON object" in prompt
        assert '"title"' in prompt
        assert '"content"' in prompt
        assert '"keywords"' in prompt
        assert "markdown" in prompt

    def test_requests_exactly_five_keywords(self):
        prompt = build_instruction("Topic", "Brief")
        assert "exactly 5 items" in prompt
        assert '["keyword1", "keyword2", "keyword3", "keyword4", "keyword5"]' in prompt

    def test_deterministic(self):
        assert build_instruction("A", "b") == build_instruction("A", "b")

    def test_brief_braces_not_interpreted(self):
        prompt = build_instruction("Topic", "Use {curly} braces")
        assert "Use {curly} braces" in prompt

    def test_template_has_placeholders(self):
        assert "{title_seed}" in INSTRUCTION_TEMPLATE
        assert "{brief}" in INSTRUCTION_TEMPLATE


# === Test: Response Parsing ===


class TestResponseParsing:
    def test_parse_valid_json(self, writer, sample_generation, sample_generation_json):
        result = writer.parse_response(sample_generation_json, "Seed")
        assert result.title == sample_generation["title"]
        assert result.content == sample_generation["content"]
        assert result.keywords == sample_generation["keywords"]

    def test_parse_json_in_code_block(self, writer, sample_generation_json):
        wrapped = f"```json\n{sample_generation_json}\n```"
        result = writer.parse_response(wrapped, "Seed")
        assert len(result.keywords) == 5

    def test_parse_plain_code_block(self, writer, sample_generation_json):
        wrapped = f"```\n{sample_generation_json}\n```\n"
        assert len(writer.parse_response(wrapped, "Seed").keywords) == 5

    def test_code_blocks_in_content_preserved(self, writer):
        content = (
            "# Setup\n\n"
            "```js\nexport const metadata = {}\n```\n\n"
            "Add a sitemap config:\n\n"
            '```json\n{"sitemap": true}\n```\n\nDone.'
        )
        raw = json.dumps({
            "title": "Next.js SEO",
            "content": content,
            "keywords": ["nextjs", "seo", "metadata", "sitemap", "react"],
        })
        result = writer.parse_response(raw, "Nextjs Seo Guide")
        assert result.title == "Next.js SEO"
        assert result.content == content
        assert result.keywords[0] == "nextjs"

    def test_prose_around_fence_is_malformed(self, writer, sample_generation_json):
        with pytest.raises(MalformedResponseError):
            writer.parse_response(f"Here is the result:\n```json\n{sample_generation_json}\n```", "Seed")

    def test_null_keywords_dropped(self, writer):
        raw = json.dumps({"title": "T", "content": "c", "keywords": ["seo", None, 42]})
        assert writer.parse_response(raw, "Seed").keywords == ["seo", "42"]

    def test_missing_keywords_default_to_empty(self, writer):
        result = writer.parse_response(json.dumps({"title": "T", "content": "body"}), "Seed")
        assert result.keywords == []

    def test_missing_title_uses_seed(self, writer):
        result = writer.parse_response(json.dumps({"content": "body"}), "Nextjs Seo Guide")
        assert result.title == "Nextjs Seo Guide"

    def test_empty_title_uses_seed(self, writer):
        result = writer.parse_response(json.dumps({"title": ""}), "Seed")
        assert result.title == "Seed"

    def test_missing_content_defaults_to_empty(self, writer):
        result = writer.parse_response(json.dumps({"title": "T"}), "Seed")
        assert result.content == ""

    def test_non_object_json_uses_defaults(self, writer):
        result = writer.parse_response(json.dumps(["not", "an", "object"]), "Seed")
        assert result.title == "Seed"
        assert result.content == ""
        assert result.keywords == []

    def test_wrong_types_use_defaults(self, writer):
        raw = json.dumps({"title": 12, "content": ["x"], "keywords": "seo, nextjs"})
        result = writer.parse_response(raw, "Seed")
        assert result.title == "Seed"
        assert result.content == ""
        assert result.keywords == []

    def test_keyword_count_not_enforced(self, writer):
        raw = json.dumps({"title": "T", "content": "c", "keywords": ["a", "b", "c"]})
        assert writer.parse_response(raw, "Seed").keywords == ["a", "b", "c"]

        nine = [f"k{i}" for i in range(9)]
        raw = json.dumps({"title": "T", "content": "c", "keywords": nine})
        assert writer.parse_response(raw, "Seed").keywords == nine

    def test_invalid_json_raises_malformed(self, writer):
        with pytest.raises(MalformedResponseError):
            writer.parse_response("This is not JSON at all", "Seed")

    def test_malformed_is_generation_error(self, writer):
        with pytest.raises(GenerationError):
            writer.parse_response("{broken", "Seed")


# === Test: LLM call ===


class TestCallLLM:
    def test_request_parameters(self, connected_writer, mock_client, completion_factory):
        mock_client.chat.completions.create.return_value = completion_factory('{"title": "T"}')

        connected_writer._call_llm("instruction text")

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama-3.1-8b-instant"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 4000
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"] == [{"role": "system", "content": "instruction text"}]
        assert "stream" not in kwargs

    def test_json_mode_disabled(self, settings, mock_client, completion_factory):
        writer = ContentWriter(config=WriterConfig(json_mode=False), settings=settings)
        writer._client = mock_client
        mock_client.chat.completions.create.return_value = completion_factory("{}")

        writer._call_llm("instruction")

        assert "response_format" not in mock_client.chat.completions.create.call_args.kwargs

    def test_service_failure(self, connected_writer, mock_client):
        mock_client.chat.completions.create.side_effect = ConnectionError("network down")

        with pytest.raises(GenerationServiceError) as exc_info:
            connected_writer._call_llm("instruction")
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_no_retry(self, connected_writer, mock_client):
        mock_client.chat.completions.create.side_effect = TimeoutError("slow")

        with pytest.raises(GenerationServiceError):
            connected_writer._call_llm("instruction")
        assert mock_client.chat.completions.create.call_count == 1

    def test_empty_content(self, connected_writer, mock_client, completion_factory):
        mock_client.chat.completions.create.return_value = completion_factory(None)

        with pytest.raises(EmptyResponseError):
            connected_writer._call_llm("instruction")

    def test_no_choices(self, connected_writer, mock_client):
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response

        with pytest.raises(EmptyResponseError):
            connected_writer._call_llm("instruction")


class TestClient:
    def test_missing_groq_key_raises(self, writer, monkeypatch):
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="GROQ_API_KEY"):
            writer._get_client()

    def test_groq_client_uses_groq_base_url(self, writer, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
        with patch("openai.OpenAI") as mock_openai:
            writer._get_client()
        mock_openai.assert_called_once_with(
            api_key="gsk-test",
            base_url="https://api.groq.com/openai/v1",
        )

    def test_explicit_api_key(self, settings):
        writer = ContentWriter(config=WriterConfig(api_key="explicit"), settings=settings)
        with patch("openai.OpenAI") as mock_openai:
            writer._get_client()
        assert mock_openai.call_args.kwargs["api_key"] == "explicit"

    def test_client_cached(self, writer, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
        with patch("openai.OpenAI") as mock_openai:
            first = writer._get_client()
            second = writer._get_client()
        assert first is second
        assert mock_openai.call_count == 1


# === Test: End-to-end ===


class TestGeneratePost:
    def test_generate_post(self, connected_writer, mock_client, completion_factory, sample_generation_json):
        mock_client.chat.completions.create.return_value = completion_factory(sample_generation_json)

        result = connected_writer.generate_post("nextjs-seo-guide", "Beginner friendly")

        assert result.title == "The Complete Next.js SEO Guide"
        assert result.content.startswith("# The Complete")
        assert len(result.keywords) == 5

        instruction = mock_client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert '"Nextjs Seo Guide"' in instruction
        assert "Beginner friendly" in instruction

    def test_title_falls_back_to_seed(self, connected_writer, mock_client, completion_factory):
        mock_client.chat.completions.create.return_value = completion_factory(
            json.dumps({"content": "body", "keywords": ["a"]})
        )
        result = connected_writer.generate_post("nextjs-seo-guide", "brief")
        assert result.title == "Nextjs Seo Guide"

    @pytest.mark.parametrize("slug,brief", [("", "brief"), ("slug", ""), (None, "b"), ("   ", "b")])
    def test_missing_input_rejected_before_call(self, connected_writer, mock_client, slug, brief):
        with pytest.raises(InputValidationError):
            connected_writer.generate_post(slug, brief)
        mock_client.chat.completions.create.assert_not_called()

    def test_malformed_reply_propagates(self, connected_writer, mock_client, completion_factory):
        mock_client.chat.completions.create.return_value = completion_factory("not json")
        with pytest.raises(MalformedResponseError):
            connected_writer.generate_post("slug", "brief")
