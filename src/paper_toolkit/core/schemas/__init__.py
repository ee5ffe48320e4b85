"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_metadata,
    validate_question,
    validate_draft,
    ValidationError,
    DRAFT_SCHEMA_VERSION,
)

__all__ = [
    "validate_metadata",
    "validate_question",
    "validate_draft",
    "ValidationError",
    "DRAFT_SCHEMA_VERSION",
]
