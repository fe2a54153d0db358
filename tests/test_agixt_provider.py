"""Tests for the AGiXT agent over a mocked HTTP transport."""

import json
import httpx
import pytest

from common.ai import AGiXTProvider
from common.utils.exceptions import AgentRequestError


class FakeAGiXT:
    """Records requests and answers like a minimal AGiXT server."""

    def __init__(self, agents=None, reply=None, prompt_status=200):
        self.requests = []
        self.agents = agents if agents is not None else []
        self.reply = reply if reply is not None else {"response": '{"quote": "Go"}'}
        self.prompt_status = prompt_status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, request.url.path, body, request.headers))

        if request.method == "GET" and request.url.path == "/api/agent":
            return httpx.Response(200, json={"agents": self.agents})
        if request.url.path.endswith("/prompt"):
            if isinstance(self.reply, str):
                return httpx.Response(self.prompt_status, text=self.reply)
            return httpx.Response(self.prompt_status, json=self.reply)
        return httpx.Response(200, json={"message": "ok"})

    def paths(self):
        return [(method, path) for method, path, _, _ in self.requests]


def _provider(server, **kwargs):
    return AGiXTProvider(
        base_uri="http://agixt.test/",
        api_key="secret",
        transport=httpx.MockTransport(server),
        **kwargs,
    )


# ─────────────────────────────────────────────────────────────────
# chat
# ─────────────────────────────────────────────────────────────────


class TestChat:
    @pytest.mark.asyncio
    async def test_creates_missing_agent_then_prompts(self):
        server = FakeAGiXT()
        provider = _provider(server)

        reply = await provider.chat("Give me a quote", system_prompt="Reply in JSON.", conversation_name="Quote_all_1")

        assert reply == {"response": '{"quote": "Go"}'}
        assert server.paths() == [
            ("GET", "/api/agent"),
            ("POST", "/api/agent"),
            ("POST", "/api/conversation"),
            ("POST", "/api/agent/WorkoutAgent/prompt"),
        ]

        _, _, prompt_body, headers = server.requests[-1]
        assert prompt_body["prompt_name"] == "Chat"
        assert prompt_body["prompt_args"]["user_input"] == "Reply in JSON.\n\nGive me a quote"
        assert prompt_body["prompt_args"]["conversation_name"] == "Quote_all_1"
        assert prompt_body["prompt_args"]["context_results"] == 4
        assert headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_existing_agent_is_not_recreated(self):
        server = FakeAGiXT(agents=[{"name": "WorkoutAgent"}])
        provider = _provider(server)

        await provider.chat("one")
        await provider.chat("two")

        assert server.paths().count(("GET", "/api/agent")) == 1
        assert ("POST", "/api/agent") not in server.paths()
        assert ("POST", "/api/conversation") not in server.paths()

    @pytest.mark.asyncio
    async def test_plain_text_reply(self):
        server = FakeAGiXT(agents=[{"name": "WorkoutAgent"}], reply='Sure: {"quote": "Go"}')
        provider = _provider(server)

        assert await provider.chat("quote please") == 'Sure: {"quote": "Go"}'

    @pytest.mark.asyncio
    async def test_error_status(self):
        server = FakeAGiXT(agents=[{"name": "WorkoutAgent"}], prompt_status=500)
        provider = _provider(server)

        with pytest.raises(AgentRequestError) as exc_info:
            await provider.chat("quote please")

        assert exc_info.value.details["status"] == 500
        assert exc_info.value.code == "AGENT_REQUEST_FAILED"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = AGiXTProvider(base_uri="http://agixt.test", transport=httpx.MockTransport(refuse))

        with pytest.raises(AgentRequestError) as exc_info:
            await provider.chat("hello")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


# ─────────────────────────────────────────────────────────────────
# Conversation log
# ─────────────────────────────────────────────────────────────────


class TestRecordMessage:
    @pytest.mark.asyncio
    async def test_posts_message(self):
        server = FakeAGiXT()
        provider = _provider(server)

        await provider.record_message("Workout_Sam_1", "assistant", '{"weeklyPlan": []}')

        method, path, body, _ = server.requests[0]
        assert (method, path) == ("POST", "/api/conversation/message")
        assert body == {
            "role": "assistant",
            "message": '{"weeklyPlan": []}',
            "conversation_name": "Workout_Sam_1",
        }

    def test_describe(self):
        provider = _provider(FakeAGiXT(), agent_name="Coach")

        assert provider.describe() == {"provider": "agixt", "agent": "Coach", "uri": "http://agixt.test"}
