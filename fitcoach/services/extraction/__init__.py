"""
Extraction services - Recover structured documents from agent replies.
"""

from fitcoach.services.extraction.response_extractor import (
    ExtractedDocument,
    StructuredResponseExtractor,
    validate_document,
    validate_items,
)

__all__ = [
    "ExtractedDocument",
    "StructuredResponseExtractor",
    "validate_document",
    "validate_items",
]
