"""
Utilities module - Error taxonomy shared by the coaching core.
"""

from common.utils.exceptions import (
    CoachException,
    ExtractionError,
    SchemaMismatchError,
    GenerationChunkError,
    AgentRequestError,
    ProfileNotFoundError,
)

__all__ = [
    "CoachException",
    "ExtractionError",
    "SchemaMismatchError",
    "GenerationChunkError",
    "AgentRequestError",
    "ProfileNotFoundError",
]
