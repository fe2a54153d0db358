"""Tests for the Claude and OpenAI agents with mocked SDK clients."""

import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from common.ai import ClaudeProvider, OpenAIProvider
from common.utils.exceptions import AgentRequestError


class TestClaudeProvider:
    @pytest.mark.asyncio
    async def test_joins_text_blocks(self):
        provider = ClaudeProvider(api_key="test-key")
        provider.client = MagicMock()
        provider.client.messages.create = AsyncMock(return_value=SimpleNamespace(content=[
            SimpleNamespace(type="text", text='{"quote": '),
            SimpleNamespace(type="tool_use", text="ignored"),
            SimpleNamespace(type="text", text='"Go"}'),
        ]))

        reply = await provider.chat("quote", system_prompt="JSON only", max_tokens=200)

        assert reply == '{"quote": "Go"}'
        params = provider.client.messages.create.await_args.kwargs
        assert params["system"] == "JSON only"
        assert params["max_tokens"] == 200
        assert params["messages"] == [{"role": "user", "content": "quote"}]

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self):
        provider = ClaudeProvider(api_key="test-key")
        provider.client = MagicMock()
        provider.client.messages.create = AsyncMock(side_effect=RuntimeError("overloaded"))

        with pytest.raises(AgentRequestError) as exc_info:
            await provider.chat("quote")

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_json_mode(self):
        provider = OpenAIProvider(api_key="test-key", json_mode=True)
        provider.client = MagicMock()
        message = SimpleNamespace(content='{"quote": "Go"}')
        provider.client.chat.completions.create = AsyncMock(
            return_value=SimpleNamespace(choices=[SimpleNamespace(message=message)])
        )

        reply = await provider.chat("quote", system_prompt="JSON only")

        assert reply == '{"quote": "Go"}'
        params = provider.client.chat.completions.create.await_args.kwargs
        assert params["response_format"] == {"type": "json_object"}
        assert params["messages"][0] == {"role": "system", "content": "JSON only"}

    @pytest.mark.asyncio
    async def test_empty_content(self):
        provider = OpenAIProvider(api_key="test-key")
        provider.client = MagicMock()
        message = SimpleNamespace(content=None)
        provider.client.chat.completions.create = AsyncMock(
            return_value=SimpleNamespace(choices=[SimpleNamespace(message=message)])
        )

        assert await provider.chat("quote") == ""

    @pytest.mark.asyncio
    async def test_record_message_is_ignored(self):
        provider = OpenAIProvider(api_key="test-key")

        assert await provider.record_message("Quote_all_1", "assistant", "{}") is None
