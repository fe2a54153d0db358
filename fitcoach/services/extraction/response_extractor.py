"""
Structured response extractor.

Recovers a JSON object from an agent reply that may be wrapped in prose,
fenced in markdown, or cut off mid-generation. Recovery only narrows the
candidate text; it never edits content or fills in fields.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from common.ai.base import RawAgentResponse
from common.utils.exceptions import ExtractionError, SchemaMismatchError

logger = logging.getLogger(__name__)

ExtractedDocument = Dict[str, Any]
ModelT = TypeVar("ModelT", bound=BaseModel)


def _whole_text(text: str) -> Optional[str]:
    return text


def _widest_brace_span(text: str) -> Optional[str]:
    """First ``{`` through last ``}``."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def _through_last_brace(text: str) -> Optional[str]:
    """Everything up to and including the last ``}``."""
    end = text.rfind("}")
    if end == -1:
        return None
    return text[:end + 1]


# Tried in order; the first candidate that parses to an object wins.
# "truncated" only differs from "brace_span" by the text before the first
# "{", so it can succeed only where "brace_span" already has; it is kept
# as the final narrowing.
TEXT_STAGES: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
    ("direct", _whole_text),
    ("brace_span", _widest_brace_span),
    ("truncated", _through_last_brace),
)


_NOT_JSON = object()


def _parse_json(candidate: str) -> Any:
    """Parse candidate text; ``_NOT_JSON`` if it is not valid JSON."""
    try:
        return json.loads(candidate)
    except ValueError:
        return _NOT_JSON


class StructuredResponseExtractor:
    """
    Turns raw agent replies into validated documents.

    Cascade for text: direct parse, then the widest brace-delimited span,
    then the prefix through the last closing brace. Text that is valid
    JSON but not an object fails at once rather than being narrowed into.
    Envelopes with a ``response`` text field run the same cascade on that
    field; any other mapping already is the document.
    """

    def __init__(self, stages=TEXT_STAGES):
        self._stages = stages

    def extract(self, response: RawAgentResponse) -> ExtractedDocument:
        """
        Extract a document from a raw reply.

        Args:
            response: Agent reply, text or envelope

        Returns:
            The recovered JSON object

        Raises:
            ExtractionError: If no stage yields a JSON object
        """
        if isinstance(response, bytes):
            response = response.decode("utf-8", errors="replace")

        if isinstance(response, str):
            return self._extract_text(response, raw_response=response)

        if isinstance(response, Mapping):
            inner = response.get("response")
            if isinstance(inner, str):
                return self._extract_text(inner, raw_response=response)
            logger.debug("Reply is already a document")
            return response if isinstance(response, dict) else dict(response)

        raise ExtractionError(
            "Response is neither a string nor an object",
            raw_response=response,
        )

    def _extract_text(self, text: str, raw_response: Any) -> ExtractedDocument:
        for stage_name, narrow in self._stages:
            candidate = narrow(text)
            if candidate is None:
                logger.warning(f"Extraction stage '{stage_name}' found no candidate")
                continue

            parsed = _parse_json(candidate)
            if parsed is _NOT_JSON:
                logger.warning(f"Extraction stage '{stage_name}' could not parse JSON")
                continue

            if not isinstance(parsed, dict):
                # Well-formed JSON of another type; narrowing into it would
                # return a fragment
                raise ExtractionError(
                    f"Response is a JSON {type(parsed).__name__}, not an object",
                    raw_response=raw_response,
                )

            logger.debug(f"Extraction stage '{stage_name}' succeeded")
            return parsed

        raise ExtractionError(
            "Failed to extract valid JSON from response",
            raw_response=raw_response,
        )

    def extract_model(
        self,
        response: RawAgentResponse,
        model_cls: Type[ModelT],
        key: Optional[str] = None,
    ) -> ModelT:
        """
        Extract a document and validate it (or one of its keys) as a model.

        Raises:
            ExtractionError: If no document could be recovered
            SchemaMismatchError: If the document does not fit ``model_cls``
        """
        return validate_document(self.extract(response), model_cls, key, raw_response=response)

    def extract_items(
        self,
        response: RawAgentResponse,
        item_cls: Type[ModelT],
        key: str,
    ) -> List[ModelT]:
        """
        Extract a list of records stored under ``key``.

        Raises:
            ExtractionError: If no document could be recovered
            SchemaMismatchError: If ``key`` is not a list of ``item_cls`` records
        """
        return validate_items(self.extract(response), item_cls, key, raw_response=response)


def _select(document: ExtractedDocument, key: Optional[str], raw_response: Any) -> Any:
    if key is None:
        return document
    if key not in document:
        raise SchemaMismatchError(
            f"Document has no '{key}' field",
            raw_response=raw_response,
            details={"keys": sorted(document.keys())},
        )
    return document[key]


def validate_document(
    document: ExtractedDocument,
    model_cls: Type[ModelT],
    key: Optional[str] = None,
    raw_response: Any = None,
) -> ModelT:
    """Validate a document, or the value under ``key``, as ``model_cls``."""
    payload = _select(document, key, raw_response)
    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        raise SchemaMismatchError(
            f"Document does not match {model_cls.__name__}",
            raw_response=raw_response,
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def validate_items(
    document: ExtractedDocument,
    item_cls: Type[ModelT],
    key: str,
    raw_response: Any = None,
) -> List[ModelT]:
    """Validate the list under ``key`` as ``item_cls`` records."""
    payload = _select(document, key, raw_response)
    if not isinstance(payload, list):
        raise SchemaMismatchError(
            f"Expected a list under '{key}'",
            raw_response=raw_response,
        )
    try:
        return [item_cls.model_validate(item) for item in payload]
    except ValidationError as e:
        raise SchemaMismatchError(
            f"Items under '{key}' do not match {item_cls.__name__}",
            raw_response=raw_response,
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
