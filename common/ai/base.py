"""
Abstract remote agent interface.

Defines the contract every chat/completion backend must implement so the
coaching core can ask for plans without caring who answers. Replies are
opaque: a provider may hand back plain text or a JSON envelope carrying a
``response`` text field, and neither is guaranteed to be well formed.

Example:
    from common.ai import AIProvider, AGiXTProvider, ClaudeProvider

    def get_agent(settings) -> AIProvider:
        if settings.AI_PROVIDER == "claude":
            return ClaudeProvider(api_key=settings.CLAUDE_API_KEY)
        return AGiXTProvider(base_uri=settings.AGIXT_URI, api_key=settings.AGIXT_API_KEY)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Union

# Plain text, or an envelope such as {"response": "..."}
RawAgentResponse = Union[str, Mapping[str, Any]]


class AIProvider(ABC):
    """
    Abstract remote agent.

    Implement this for each completion service. Calls are independent:
    no provider is expected to remember earlier prompts unless a
    ``conversation_name`` is given and the backend supports it.
    """

    @abstractmethod
    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        conversation_name: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> RawAgentResponse:
        """
        Send a prompt and get the raw reply.

        Args:
            message: The prompt, including its example schema
            system_prompt: Optional context shared by related calls
            conversation_name: Optional named conversation to log the exchange in
            max_tokens: Maximum tokens in the response
            temperature: Sampling temperature (0-1)
            **kwargs: Provider-specific options

        Returns:
            The raw reply, text or envelope

        Raises:
            AgentRequestError: If the backend could not be reached
        """
        pass

    async def record_message(
        self,
        conversation_name: str,
        role: str,
        message: str,
    ) -> None:
        """
        Append a message to a named conversation.

        Backends without conversation storage ignore this.
        """
        return None

    def describe(self) -> Dict[str, Any]:
        """Short description used in diagnostic logs."""
        return {"provider": type(self).__name__}
