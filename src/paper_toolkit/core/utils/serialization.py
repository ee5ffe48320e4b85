"""
Serialization Utilities

Provides to/from JSON utilities for the core data models.

Bank files come from more than one producer, so question records are
normalized first: camelCase keys used by the web client (`questionText`,
`posMarks`, `correctAnswer`) are accepted alongside the snake_case keys
written by `Question.to_dict()`. Calculated values (subtotals, totals)
are never trusted on load.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from ..models.questions import Question
from ..models.sections import SectionSpec
from ..schemas.validator import ValidationError, validate_question


# Source key -> normalized key
_QUESTION_ALIASES = {
    "questionText": "text",
    "question_text": "text",
    "posMarks": "positive_marks",
    "positiveMarks": "positive_marks",
    "marks": "positive_marks",
    "correctAnswer": "correct_answer",
    "topic": "group",
    "_id": "id",
    "questionId": "id",
}


# ─────────────────────────────────────────────────────────────────────────────
# Question Serialization
# ─────────────────────────────────────────────────────────────────────────────

def normalize_question_record(data: dict[str, Any], index: int) -> dict[str, Any]:
    """
    Map a raw bank record onto the snake_case question layout.

    Args:
        data: Raw record from a bank file
        index: Zero-based position in the bank, used to assign an id to
            records that have none

    Returns:
        New dictionary; the input is not modified
    """
    out: dict[str, Any] = {}
    for key, value in data.items():
        out[_QUESTION_ALIASES.get(key, key)] = value

    if not out.get("id"):
        out["id"] = f"q{index + 1}"
    else:
        out["id"] = str(out["id"])

    # Falsy marks (0, "", null) mean "use the section default"
    if not out.get("positive_marks"):
        out.pop("positive_marks", None)

    return out


def serialize_question(question: Question) -> dict[str, Any]:
    """
    Serialize a Question to a dictionary.

    Args:
        question: Question instance to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    return question.to_dict()


def deserialize_question(
    data: dict[str, Any],
    *,
    validate: bool = True,
) -> Question:
    """
    Deserialize a Question from a normalized dictionary.

    Args:
        data: Dictionary with snake_case keys
        validate: Whether to run field validation first

    Returns:
        Question instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed
    """
    if validate:
        validate_question(data)
    return Question.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Section Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_section(section: SectionSpec) -> dict[str, Any]:
    """Serialize a SectionSpec for a draft snapshot."""
    return section.to_dict()


def deserialize_section(
    data: dict[str, Any],
    bank: Optional[list[Question]] = None,
) -> SectionSpec:
    """
    Deserialize a SectionSpec, reusing bank questions where ids match.

    Args:
        data: Section dictionary from a snapshot
        bank: Optional bank used to restore question identity

    Returns:
        SectionSpec with subtotal recomputed from its selection
    """
    resolve = {q.id: q for q in bank} if bank else None
    return SectionSpec.from_dict(data, resolve=resolve)


# ─────────────────────────────────────────────────────────────────────────────
# JSONL Files
# ─────────────────────────────────────────────────────────────────────────────

def load_questions_jsonl(path: Path, *, validate: bool = True) -> list[Question]:
    """
    Load questions from a JSONL file (one record per line).

    Args:
        path: Path to questions.jsonl file
        validate: Whether to validate each record

    Returns:
        List of Question objects in file order

    Raises:
        ValidationError: If a line is not an object, or validate=True and a
            record is invalid
        json.JSONDecodeError: If a line is not valid JSON
    """
    questions = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            raw = json.loads(line)
            if not isinstance(raw, dict):
                raise ValidationError(
                    f"Line {line_no} is not a question object",
                    path=f"line {line_no}",
                )
            record = normalize_question_record(raw, len(questions))
            questions.append(deserialize_question(record, validate=validate))
    return questions


def save_questions_jsonl(questions: list[Question], path: Path) -> None:
    """
    Save questions to a JSONL file.

    Args:
        questions: Questions to save
        path: Output path for questions.jsonl
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for q in questions:
            f.write(json.dumps(serialize_question(q), ensure_ascii=False) + "\n")
