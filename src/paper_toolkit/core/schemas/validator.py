"""
Schema Validation Utilities

Validates user-supplied paper metadata, bank question records and draft
snapshots.

Basic checks (required fields, value ranges) run first and fail fast with
a readable message. Draft snapshots additionally go through full JSON
Schema validation against the bundled `draft.schema.json`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Schema version constants
DRAFT_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when user input or stored data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_metadata(data: dict[str, Any]) -> None:
    """
    Validate paper metadata before finalizing.

    All problems are collected so the caller can report every invalid
    field at once.

    Args:
        data: Metadata dictionary (see PaperMetadata.to_dict)

    Raises:
        ValidationError: If template_name or paper_name is empty, or the
            duration is not positive. `errors` names each invalid field.
    """
    errors: list[str] = []

    for name in ("template_name", "paper_name"):
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{name} must be non-empty")

    hours = data.get("hours", 0)
    minutes = data.get("minutes", 0)
    if not isinstance(hours, int) or not isinstance(minutes, int):
        errors.append("duration must be whole hours and minutes")
    elif hours < 0 or minutes < 0:
        errors.append("duration components must be non-negative")
    elif hours * 60 + minutes <= 0:
        errors.append("duration must be greater than zero")

    if errors:
        raise ValidationError(
            f"Invalid paper metadata: {'; '.join(errors)}",
            path="metadata",
            errors=errors,
        )


def validate_question(data: dict[str, Any]) -> None:
    """
    Validate a normalized question record.

    Args:
        data: Question dictionary with snake_case keys

    Raises:
        ValidationError: If data is invalid
    """
    required = ["id", "text", "difficulty", "type"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=str(data.get("id", "")),
            errors=[f"Missing field: {f}" for f in missing],
        )

    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(
            f"Question {data['id']!r} has empty text",
            path=f"{data['id']}.text",
        )

    marks = data.get("positive_marks")
    if marks is not None and (
        isinstance(marks, bool) or not isinstance(marks, int) or marks <= 0
    ):
        raise ValidationError(
            f"Invalid positive_marks: {marks!r} (must be a positive integer)",
            path=f"{data['id']}.positive_marks",
        )


def validate_draft(data: dict[str, Any]) -> None:
    """
    Validate a draft snapshot against the draft schema.

    Args:
        data: Snapshot produced by PaperAssembler.to_snapshot()

    Raises:
        ValidationError: If the version is unsupported or the snapshot does
            not match the schema
    """
    version = data.get("schema_version") if isinstance(data, dict) else None
    if version != DRAFT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported draft schema version: {version} (expected {DRAFT_SCHEMA_VERSION})",
            path="schema_version",
        )

    schema = _load_schema("draft")
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e
