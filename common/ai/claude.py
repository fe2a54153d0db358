"""
Anthropic Claude agent implementation.

Sends coaching prompts through the Anthropic Messages API and returns the
reply text untouched; structure recovery happens downstream.

Example:
    from common.ai import ClaudeProvider

    claude = ClaudeProvider(api_key="your-api-key")
    reply = await claude.chat(
        message="Create a workout plan ... format as JSON",
        system_prompt="You are an expert fitness coach.",
    )
"""

import logging
from typing import Optional, Dict, Any

from common.ai.base import AIProvider
from common.utils.exceptions import AgentRequestError

logger = logging.getLogger(__name__)


class ClaudeProvider(AIProvider):
    """
    Anthropic Claude agent.

    Uses the async Anthropic client. Conversation names are accepted for
    interface compatibility but nothing is stored server-side.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5-20250929",
        max_retries: int = 3,
        timeout: float = 60.0,
    ):
        """
        Initialize Claude provider.

        Args:
            api_key: Anthropic API key
            model: Model to use
            max_retries: Number of client-level retries for failed requests
            timeout: Request timeout in seconds
        """
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "anthropic package is required for Claude. "
                "Install with: pip install anthropic"
            )

        self.client = AsyncAnthropic(
            api_key=api_key,
            max_retries=max_retries,
            timeout=timeout,
        )
        self.model = model

    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        conversation_name: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> str:
        """Send prompt and return Claude's text reply."""
        params: Dict[str, Any] = {
            "model": kwargs.get("model", self.model),
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": message}],
        }

        if system_prompt:
            params["system"] = system_prompt

        for key in ["stop_sequences", "top_p", "top_k", "metadata"]:
            if key in kwargs:
                params[key] = kwargs[key]

        try:
            response = await self.client.messages.create(**params)
        except Exception as e:
            logger.error(f"Claude request failed: {e}")
            raise AgentRequestError(f"Claude request failed: {e}") from e

        return "".join(
            block.text for block in response.content if block.type == "text"
        )

    def describe(self) -> Dict[str, Any]:
        return {"provider": "claude", "model": self.model}
