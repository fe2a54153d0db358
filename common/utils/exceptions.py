"""
Coaching core exceptions with error codes.

Every error raised by the core carries a human-readable message, a
machine-readable code and optional details so the orchestration layer can
show a message and decide whether to offer a retry.

Example:
    from common.utils import ExtractionError

    try:
        document = extractor.extract(reply)
    except ExtractionError as e:
        logger.warning(f"{e.code}: {e.message}")
        show_retry_button()
"""

from typing import Optional, Any, Dict


class CoachException(Exception):
    """
    Base exception with error code support.

    Provides a consistent error shape across the core.
    """

    default_code = "COACH_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        """
        Create a coaching core exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Render the error for logs or a client payload."""
        payload: Dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ExtractionError(CoachException):
    """No stage of the extraction cascade produced a valid document."""

    default_code = "EXTRACTION_FAILED"

    def __init__(
        self,
        message: str = "Failed to extract valid JSON from response",
        raw_response: Any = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, code, details)
        self.raw_response = raw_response


class SchemaMismatchError(ExtractionError):
    """A document was recovered but does not have the expected shape."""

    default_code = "SCHEMA_MISMATCH"


class GenerationChunkError(CoachException):
    """A chunk of a batch generation failed; the whole batch is abandoned."""

    default_code = "GENERATION_CHUNK_FAILED"

    def __init__(
        self,
        message: str,
        chunk_index: int,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, code, details)
        self.chunk_index = chunk_index


class AgentRequestError(CoachException):
    """The remote agent could not be reached or rejected the request."""

    default_code = "AGENT_REQUEST_FAILED"


class ProfileNotFoundError(CoachException):
    """An action was requested for a profile that was never created."""

    default_code = "PROFILE_NOT_FOUND"

    def __init__(self, profile_id: str):
        super().__init__(
            f"No profile stored for {profile_id}",
            details={"profileId": profile_id},
        )
        self.profile_id = profile_id
