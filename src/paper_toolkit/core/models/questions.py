"""
Module: questions

Purpose:
    Provides the Question dataclass - one pre-authored bank question.
    Questions are supplied by the question repository and never mutated
    by the toolkit.

Key Functions:
    - Question.marks_or(default): Own mark value with a section fallback
    - Question.to_dict() / Question.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .enums: Difficulty, QuestionType

Used By:
    - assembler.sampling.sampler: Filtering and sampling
    - core.models.sections.SectionSpec: Selected questions
    - core.utils.serialization: Bank files and draft snapshots

Identity:
    Questions compare by identity (`eq=False`), never by content. Two bank
    entries with identical text are still two different questions. The
    `id` field is the stable identity used in serialized drafts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .enums import Difficulty, QuestionType


@dataclass(frozen=True, eq=False)
class Question:
    """
    Bank question (immutable).

    Attributes:
        id: Stable identifier like "q7"
        text: Question text shown to students
        group: Topic tag like "Robotics"
        difficulty: Difficulty band
        type: Question kind
        correct_answer: Opaque answer string
        positive_marks: Mark value when selected, or None to use the
            section default

    Invariants:
        - id and text are non-empty
        - positive_marks is None or a positive integer

    Example:
        >>> q = Question(
        ...     id="q1",
        ...     text="What is sensor fusion?",
        ...     group="Robotics",
        ...     difficulty=Difficulty.MEDIUM,
        ...     type=QuestionType.MCQ,
        ...     correct_answer="Perception Fusion",
        ...     positive_marks=4,
        ... )
        >>> q.marks_or(2)
        4
    """

    id: str
    text: str
    group: str
    difficulty: Difficulty
    type: QuestionType
    correct_answer: str = ""
    positive_marks: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not self.id:
            raise ValueError("Question id must be non-empty")
        if not self.text or not self.text.strip():
            raise ValueError(f"Question {self.id!r} has empty text")
        if not isinstance(self.difficulty, Difficulty):
            raise ValueError(f"Invalid difficulty for {self.id!r}: {self.difficulty!r}")
        if not isinstance(self.type, QuestionType):
            raise ValueError(f"Invalid question type for {self.id!r}: {self.type!r}")
        if self.positive_marks is not None:
            if isinstance(self.positive_marks, bool) or not isinstance(self.positive_marks, int):
                raise ValueError(f"positive_marks must be an integer: {self.positive_marks!r}")
            if self.positive_marks <= 0:
                raise ValueError(f"positive_marks must be positive: {self.positive_marks}")

    def marks_or(self, default: int) -> int:
        """
        Mark value of this question, falling back to a section default.

        Args:
            default: Value used when the question has no own mark

        Returns:
            positive_marks if set, otherwise default
        """
        return self.positive_marks if self.positive_marks else default

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to dictionary for JSON storage.

        positive_marks is omitted when the question has no own mark.
        """
        d: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "group": self.group,
            "difficulty": self.difficulty.value,
            "type": self.type.value,
            "correct_answer": self.correct_answer,
        }
        if self.positive_marks is not None:
            d["positive_marks"] = self.positive_marks
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Question:
        """
        Deserialize from dictionary written by to_dict().

        Args:
            data: Dict representation

        Returns:
            Question instance
        """
        return cls(
            id=data["id"],
            text=data["text"],
            group=data.get("group", ""),
            difficulty=Difficulty.parse(data["difficulty"]),
            type=QuestionType.parse(data["type"]),
            correct_answer=data.get("correct_answer", ""),
            positive_marks=data.get("positive_marks"),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"Question({self.id!r}, {self.difficulty.value}, "
            f"group={self.group!r}, marks={self.positive_marks})"
        )
