"""
Module: assembler.loading.loader

Purpose:
    Load the question bank supplied by the question repository. The bank
    is read once per session and never re-fetched or mutated.

Key Functions:
    - load_question_bank(): Load a bank from a .json or .jsonl file
    - parse_question_bank(): Build questions from raw records
    - load_sample_bank(): Bundled demonstration bank

Key Classes:
    - LoaderError: Exception for loading failures

Dependencies:
    - json (std)
    - importlib.resources (std): bundled sample bank
    - core.utils.serialization: record normalization

Used By:
    - Callers constructing a PaperAssembler
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Iterable

from paper_toolkit.core.models import Question
from paper_toolkit.core.schemas.validator import ValidationError
from paper_toolkit.core.utils.serialization import (
    deserialize_question,
    load_questions_jsonl,
    normalize_question_record,
)

logger = logging.getLogger(__name__)

SAMPLE_BANK = "sample_bank.json"


class LoaderError(Exception):
    """Error loading a question bank."""
    pass


def parse_question_bank(records: Iterable[dict[str, Any]]) -> list[Question]:
    """
    Build Question objects from raw bank records.

    Args:
        records: Dicts using either camelCase or snake_case keys

    Returns:
        Questions in record order

    Raises:
        LoaderError: If a record is invalid or two records share an id
    """
    questions: list[Question] = []
    seen: set[str] = set()
    for index, raw in enumerate(records):
        if not isinstance(raw, dict):
            raise LoaderError(f"Question record {index} is not an object")
        record = normalize_question_record(raw, index)
        try:
            question = deserialize_question(record)
        except (ValidationError, ValueError, KeyError) as e:
            raise LoaderError(f"Invalid question record {index}: {e}") from e
        if question.id in seen:
            raise LoaderError(f"Duplicate question id: {question.id!r}")
        seen.add(question.id)
        questions.append(question)
    return questions


def load_question_bank(path: Path) -> list[Question]:
    """
    Load a question bank file.

    `.jsonl` files hold one record per line. `.json` files hold either a
    list of records or an object with a "questions" list.

    Args:
        path: Bank file

    Returns:
        Questions in file order

    Raises:
        LoaderError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.exists():
        raise LoaderError(f"Question bank not found: {path}")

    if path.suffix == ".jsonl":
        try:
            questions = load_questions_jsonl(path)
        except (OSError, json.JSONDecodeError, ValidationError, ValueError, KeyError) as e:
            raise LoaderError(f"Failed to load {path}: {e}") from e
        ids = [q.id for q in questions]
        if len(set(ids)) != len(ids):
            dup = next(i for i in ids if ids.count(i) > 1)
            raise LoaderError(f"Duplicate question id: {dup!r}")
    else:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise LoaderError(f"Failed to read {path}: {e}") from e
        if isinstance(data, dict):
            data = data.get("questions")
        if not isinstance(data, list):
            raise LoaderError(f"{path} must contain a list of questions")
        questions = parse_question_bank(data)

    logger.info(f"Loaded {len(questions)} questions from {path.name}")
    return questions


def load_sample_bank() -> list[Question]:
    """Load the demonstration bank bundled with the package."""
    text = resources.files("paper_toolkit.data").joinpath(SAMPLE_BANK).read_text(encoding="utf-8")
    return parse_question_bank(json.loads(text))
