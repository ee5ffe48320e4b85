"""
Module: marks

Purpose:
    Provides the Marks dataclass - the resolved mark value of a selected
    question together with where that value came from. A question's own
    mark always wins; the section default is only a fallback.

Key Functions:
    - Marks.from_question(value): Mark carried by the question itself
    - Marks.section_default(value): Mark supplied by the section default
    - Marks.resolve(question, default): Apply the fallback rule
    - Marks.total(marks): Sum a sequence of resolved marks

Dependencies:
    - dataclasses (std)
    - typing (std)
    - .questions.Question (TYPE_CHECKING only)

Used By:
    - core.models.sections.SectionSpec
    - core.models.paper.SectionSnapshot
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Literal

if TYPE_CHECKING:
    from .questions import Question


MarkSource = Literal["question", "section_default"]


@dataclass(frozen=True, slots=True)
class Marks:
    """
    Resolved mark information for one selected question.

    Attributes:
        value: Non-negative integer mark value
        source: How this mark was determined
            - "question": The question's own positive_marks
            - "section_default": The section's default_mark_per_question

    Invariants:
        - value >= 0
        - source is one of the valid literals

    Example:
        >>> Marks.resolve(question_without_marks, default=4)
        Marks(4, 'section_default')
    """

    value: int
    source: MarkSource

    def __post_init__(self) -> None:
        """Validate marks on construction."""
        if self.value < 0:
            raise ValueError(f"Marks cannot be negative: {self.value}")
        if self.source not in ("question", "section_default"):
            raise ValueError(f"Invalid mark source: {self.source}")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_question(cls, value: int) -> Marks:
        """Create marks taken from the question's own mark value."""
        return cls(value=value, source="question")

    @classmethod
    def section_default(cls, value: int) -> Marks:
        """Create marks taken from the section's default mark per question."""
        return cls(value=value, source="section_default")

    @classmethod
    def resolve(cls, question: Question, default: int) -> Marks:
        """
        Resolve the mark value of a selected question.

        Args:
            question: The selected question
            default: Section default used when the question has no own mark

        Returns:
            Marks with source "question" when the question carries a mark,
            otherwise source "section_default"
        """
        if question.positive_marks:
            return cls.from_question(question.positive_marks)
        return cls.section_default(default)

    @staticmethod
    def total(marks: Iterable[Marks]) -> int:
        """Sum of resolved mark values."""
        return sum(m.value for m in marks)

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Marks({self.value}, {self.source!r})"
