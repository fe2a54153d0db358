"""
AGiXT agent implementation.

Talks to an AGiXT server over its REST API. The server answers prompts with
a JSON envelope whose ``response`` field holds the model's text, which is
returned to callers as is.

Example:
    from common.ai import AGiXTProvider

    agent = AGiXTProvider(base_uri="http://localhost:7437", api_key="key")
    envelope = await agent.chat("Create a meal plan ...", conversation_name="MealPlan_Sam_1700000000")
    print(envelope["response"])
"""

import logging
from typing import Optional, Dict, Any, List

import httpx

from common.ai.base import AIProvider
from common.utils.exceptions import AgentRequestError

logger = logging.getLogger(__name__)


DEFAULT_AGENT_SETTINGS: Dict[str, Any] = {
    "provider": "gpt4free",
    "AI_MODEL": "gpt-3.5-turbo",
    "AI_TEMPERATURE": 0.7,
    "MAX_TOKENS": 4000,
    "embedder": "default",
}


class AGiXTProvider(AIProvider):
    """
    AGiXT REST agent.

    The named agent is created on first use if the server does not list it.
    Every chat runs in its own conversation unless one is named.
    """

    def __init__(
        self,
        base_uri: str,
        api_key: Optional[str] = None,
        agent_name: str = "WorkoutAgent",
        context_results: int = 4,
        agent_settings: Optional[Dict[str, Any]] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize AGiXT provider.

        Args:
            base_uri: AGiXT server root, e.g. http://localhost:7437
            api_key: Bearer token for the server
            agent_name: Agent to prompt (created if missing)
            context_results: Memory results the server may inject
            agent_settings: Settings used when creating the agent
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_uri = base_uri.rstrip("/")
        self.agent_name = agent_name
        self.context_results = context_results
        self.agent_settings = agent_settings or dict(DEFAULT_AGENT_SETTINGS)
        self._timeout = timeout
        self._transport = transport
        self._agent_ready = False

        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body."""
        try:
            async with httpx.AsyncClient(
                base_url=self.base_uri,
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, endpoint, json=data)
        except httpx.RequestError as e:
            logger.error(f"Error in {method} request to {endpoint}: {e}")
            raise AgentRequestError(
                f"AGiXT request to {endpoint} failed",
                details={"endpoint": endpoint, "error": str(e)},
            ) from e

        if response.status_code >= 400:
            logger.error(
                f"AGiXT {method} {endpoint} returned {response.status_code}: {response.text}"
            )
            raise AgentRequestError(
                f"AGiXT request to {endpoint} returned {response.status_code}",
                details={"endpoint": endpoint, "status": response.status_code},
            )

        try:
            return response.json()
        except ValueError:
            # Some AGiXT builds answer the prompt endpoint with bare text
            return response.text

    async def list_agents(self) -> List[Dict[str, Any]]:
        """List agents known to the server."""
        body = await self._request("GET", "/api/agent")
        if isinstance(body, dict):
            return body.get("agents", []) or []
        return []

    async def ensure_agent(self) -> None:
        """Create the configured agent unless the server already has it."""
        if self._agent_ready:
            return

        agents = await self.list_agents()
        if not any(agent.get("name") == self.agent_name for agent in agents):
            await self._request(
                "POST",
                "/api/agent",
                {"agent_name": self.agent_name, "settings": self.agent_settings},
            )
            logger.info(f"Created AGiXT agent {self.agent_name}")

        self._agent_ready = True

    async def new_conversation(self, conversation_name: str) -> None:
        """Open an empty conversation for the configured agent."""
        await self._request(
            "POST",
            "/api/conversation",
            {
                "conversation_name": conversation_name,
                "agent_name": self.agent_name,
                "conversation_content": [],
            },
        )

    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        conversation_name: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> Any:
        """
        Prompt the agent through the ``Chat`` prompt template.

        AGiXT has no separate system channel, so ``system_prompt`` is
        prepended to the user input. Generation limits are agent settings
        on the server; ``max_tokens`` and ``temperature`` are ignored here.

        Returns:
            The server's envelope (normally ``{"response": "..."}``) or text
        """
        await self.ensure_agent()

        if conversation_name:
            await self.new_conversation(conversation_name)

        user_input = f"{system_prompt}\n\n{message}" if system_prompt else message

        logger.debug(f"Sending prompt to AGiXT agent {self.agent_name}")
        reply = await self._request(
            "POST",
            f"/api/agent/{self.agent_name}/prompt",
            {
                "prompt_name": "Chat",
                "prompt_args": {
                    "user_input": user_input,
                    "context_results": self.context_results,
                    "conversation_name": conversation_name or "",
                    "disable_memory": True,
                },
            },
        )
        logger.debug(f"Received reply from AGiXT agent {self.agent_name}")
        return reply

    async def record_message(
        self,
        conversation_name: str,
        role: str,
        message: str,
    ) -> None:
        """Append a message to an AGiXT conversation."""
        await self._request(
            "POST",
            "/api/conversation/message",
            {
                "role": role,
                "message": message,
                "conversation_name": conversation_name,
            },
        )

    def describe(self) -> Dict[str, Any]:
        return {"provider": "agixt", "agent": self.agent_name, "uri": self.base_uri}
