"""Unit tests for LLM-backed argument generation."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from relay_core.config.models import GenerationConfig
from relay_core.inference import (
    GenerationPort,
    OpenAIArgumentGenerator,
    extract_json_object,
    parse_generated_arguments,
)
from relay_core.inference.generation import SYSTEM_PROMPT, build_prompt


def _completion(content: str | None):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client(create: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = create
    client.close = AsyncMock()
    return client


class TestParsing:
    """Tests for reply parsing."""

    def test_extract_json_object(self):
        assert extract_json_object('Sure!\n```json\n{"a": {"b": 1}}\n```') == '{"a": {"b": 1}}'
        assert extract_json_object("no json") is None

    def test_parse_rest_shape(self):
        """Method is uppercased and nulls dropped."""
        arguments = parse_generated_arguments(
            '{"endpoint": "issue/PROJ-5/comment", "method": "post", "data": {"body": "hi"}, "params": null}'
        )
        assert arguments == {
            "endpoint": "issue/PROJ-5/comment",
            "method": "POST",
            "data": {"body": "hi"},
        }

    def test_parse_extra_keys_pass_through(self):
        assert parse_generated_arguments('{"cql_query": "text ~ \\"x\\"", "limit": 5}') == {
            "cql_query": 'text ~ "x"',
            "limit": 5,
        }

    @pytest.mark.parametrize(
        "text",
        [None, "", "nothing here", "{broken", '{"data": "not a dict"}', "{}"],
    )
    def test_unusable(self, text):
        assert parse_generated_arguments(text) is None

    def test_prompt_includes_reference(self):
        prompt = build_prompt("tool", "get PROJ-5", "desc", "REFERENCE")
        assert "User Query: get PROJ-5" in prompt
        assert "REFERENCE" in prompt


class TestOpenAIArgumentGenerator:
    """Tests for the OpenAI-compatible generator."""

    def test_is_generation_port(self):
        generator = OpenAIArgumentGenerator(GenerationConfig(), client=_client(AsyncMock()))
        assert isinstance(generator, GenerationPort)

    @pytest.mark.asyncio
    async def test_generate(self):
        """Test the request and the parsed reply."""
        create = AsyncMock(return_value=_completion('{"endpoint": "issue/PROJ-5", "method": "get"}'))
        config = GenerationConfig(enabled=True, model="test-model", max_tokens=64)
        generator = OpenAIArgumentGenerator(config, client=_client(create))

        arguments = await generator.generate_arguments("jira", "get PROJ-5", "Jira API", "ref")

        assert arguments == {"endpoint": "issue/PROJ-5", "method": "GET"}
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 64
        assert kwargs["temperature"] == 0.0
        assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert "Tool: jira" in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_api_error_returns_none(self):
        """API failures fall through instead of raising."""
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        create = AsyncMock(side_effect=openai.APIConnectionError(request=request))
        generator = OpenAIArgumentGenerator(GenerationConfig(), client=_client(create))

        assert await generator.generate_arguments("jira", "q", "d") is None

    @pytest.mark.asyncio
    async def test_no_choices(self):
        create = AsyncMock(return_value=SimpleNamespace(choices=[]))
        generator = OpenAIArgumentGenerator(GenerationConfig(), client=_client(create))
        assert await generator.generate_arguments("jira", "q", "d") is None

    @pytest.mark.asyncio
    async def test_aclose(self):
        client = _client(AsyncMock())
        await OpenAIArgumentGenerator(GenerationConfig(), client=client).aclose()
        client.close.assert_awaited_once()
