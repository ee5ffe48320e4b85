"""
Utils Package

Serialization utility functions.
"""

from .serialization import (
    normalize_question_record,
    serialize_question,
    deserialize_question,
    serialize_section,
    deserialize_section,
    load_questions_jsonl,
    save_questions_jsonl,
)

__all__ = [
    "normalize_question_record",
    "serialize_question",
    "deserialize_question",
    "serialize_section",
    "deserialize_section",
    "load_questions_jsonl",
    "save_questions_jsonl",
]
