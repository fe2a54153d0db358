"""
AI module - Pluggable remote agents (AGiXT, Claude, OpenAI).
"""

from common.ai.base import AIProvider, RawAgentResponse
from common.ai.agixt import AGiXTProvider
from common.ai.claude import ClaudeProvider
from common.ai.openai import OpenAIProvider

__all__ = [
    "AIProvider",
    "RawAgentResponse",
    "AGiXTProvider",
    "ClaudeProvider",
    "OpenAIProvider",
]
