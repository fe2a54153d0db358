"""
OpenAI GPT agent implementation.

Example:
    from common.ai import OpenAIProvider

    gpt = OpenAIProvider(api_key="your-api-key")
    reply = await gpt.chat("Suggest three fitness challenges ... as JSON")
"""

import logging
from typing import Optional, List, Dict, Any

from common.ai.base import AIProvider
from common.utils.exceptions import AgentRequestError

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """
    OpenAI chat completions agent.

    ``json_mode=True`` asks the API for a JSON object reply; the extractor
    still treats the text as untrusted.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        max_retries: int = 3,
        timeout: float = 60.0,
        organization: Optional[str] = None,
        json_mode: bool = False,
    ):
        try:
            from openai import AsyncOpenAI
        except ImportError:
            raise ImportError(
                "openai package is required for OpenAI. "
                "Install with: pip install openai"
            )

        self.client = AsyncOpenAI(
            api_key=api_key,
            max_retries=max_retries,
            timeout=timeout,
            organization=organization,
        )
        self.model = model
        self.json_mode = json_mode

    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        conversation_name: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> str:
        """Send prompt and return the first choice's text."""
        messages: List[Dict[str, str]] = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": message})

        params: Dict[str, Any] = {
            "model": kwargs.get("model", self.model),
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        if self.json_mode:
            params["response_format"] = {"type": "json_object"}

        for key in ["stop", "presence_penalty", "frequency_penalty", "top_p", "seed"]:
            if key in kwargs:
                params[key] = kwargs[key]

        try:
            response = await self.client.chat.completions.create(**params)
        except Exception as e:
            logger.error(f"OpenAI request failed: {e}")
            raise AgentRequestError(f"OpenAI request failed: {e}") from e

        return response.choices[0].message.content or ""

    def describe(self) -> Dict[str, Any]:
        return {"provider": "openai", "model": self.model, "jsonMode": self.json_mode}
