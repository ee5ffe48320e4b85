"""
Module: core.models.enums

Purpose:
    Enumerations for question difficulty and question type. Values are
    the display labels used by the question bank and submission payloads.

Key Classes:
    - Difficulty: Easy / Medium / Hard
    - QuestionType: MCQ / Short Answer / True/False

Used By:
    - core.models.questions: Question
    - core.models.sections: SectionSpec
    - assembler.sampling.sampler: difficulty filter
"""

from __future__ import annotations

from enum import Enum


def _normalize_label(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


class Difficulty(str, Enum):
    """
    Difficulty band of a question, matched exactly by the sampler.

    Example:
        >>> Difficulty.parse("medium")
        <Difficulty.MEDIUM: 'Medium'>
    """

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def parse(cls, value: str | Difficulty) -> Difficulty:
        """
        Parse a difficulty label, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If the label is not a known difficulty
        """
        if isinstance(value, cls):
            return value
        key = _normalize_label(str(value))
        for member in cls:
            if _normalize_label(member.value) == key:
                return member
        raise ValueError(f"Unknown difficulty: {value!r}")


class QuestionType(str, Enum):
    """
    Kind of question. New kinds are added as members here.

    Parsing ignores case and punctuation, so "Short Answer",
    "ShortAnswer" and "short_answer" all resolve to SHORT_ANSWER.
    """

    MCQ = "MCQ"
    SHORT_ANSWER = "Short Answer"
    TRUE_FALSE = "True/False"

    @classmethod
    def parse(cls, value: str | QuestionType) -> QuestionType:
        """
        Parse a question type label.

        Raises:
            ValueError: If the label is not a known question type
        """
        if isinstance(value, cls):
            return value
        key = _normalize_label(str(value))
        for member in cls:
            if key in (_normalize_label(member.value), _normalize_label(member.name)):
                return member
        raise ValueError(f"Unknown question type: {value!r}")
