"""
Common library for reusable infrastructure components.

- ai: Pluggable remote agents (AGiXT, Claude, OpenAI)
- storage: Async key/value state stores (in-memory, MongoDB)
- utils: Error taxonomy with machine-readable codes
- config: Base settings class
"""

from common.ai import AIProvider, AGiXTProvider, ClaudeProvider, OpenAIProvider
from common.storage import StateStore, InMemoryStateStore, MongoStateStore
from common.utils import (
    CoachException,
    ExtractionError,
    SchemaMismatchError,
    GenerationChunkError,
    AgentRequestError,
    ProfileNotFoundError,
)
from common.config import BaseAppSettings

__all__ = [
    # AI
    "AIProvider",
    "AGiXTProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    # Storage
    "StateStore",
    "InMemoryStateStore",
    "MongoStateStore",
    # Errors
    "CoachException",
    "ExtractionError",
    "SchemaMismatchError",
    "GenerationChunkError",
    "AgentRequestError",
    "ProfileNotFoundError",
    # Config
    "BaseAppSettings",
]
