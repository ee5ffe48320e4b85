"""
Module: paper

Purpose:
    Provides the paper-level models: editable-by-replacement metadata, the
    frozen per-section snapshot, and the FinalizedPaper handed to a
    submission adapter.

Key Classes:
    - PaperMetadata: Template/paper names, duration and instructions
    - SectionSnapshot: Point-in-time copy of a SectionSpec
    - FinalizedPaper: Immutable assembled paper with calculated total

Dependencies:
    - dataclasses (std)
    - functools (std)
    - .sections.SectionSpec
    - .marks.Marks

Used By:
    - assembler.paper_assembler: finalize() and submit()
    - storage.paper_store: LocalPaperStore
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from .enums import Difficulty
from .marks import Marks
from .questions import Question
from .sections import SectionSpec


@dataclass(frozen=True)
class PaperMetadata:
    """
    Top-level paper fields supplied by the user.

    Not validated on construction: a draft may hold incomplete metadata.
    Validation happens at finalize time (see
    `core.schemas.validator.validate_metadata`).

    Attributes:
        template_name: Name of the paper template
        paper_name: Name of this paper; also the draft cache key
        hours: Duration hours component
        minutes: Duration minutes component
        instructions: Optional instructions printed on the paper
    """

    template_name: str = ""
    paper_name: str = ""
    hours: int = 1
    minutes: int = 30
    instructions: str = ""

    @property
    def duration_minutes(self) -> int:
        """Total duration in minutes."""
        return self.hours * 60 + self.minutes

    def to_dict(self) -> dict[str, Any]:
        return {
            "template_name": self.template_name,
            "paper_name": self.paper_name,
            "hours": self.hours,
            "minutes": self.minutes,
            "instructions": self.instructions,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperMetadata:
        return cls(
            template_name=data.get("template_name", ""),
            paper_name=data.get("paper_name", ""),
            hours=data.get("hours", 1),
            minutes=data.get("minutes", 30),
            instructions=data.get("instructions", "") or "",
        )


@dataclass(frozen=True)
class SectionSnapshot:
    """
    Frozen copy of a section at finalize time.

    Attributes:
        name: Section name
        difficulty: Difficulty band
        topic_filter: Requested topics (empty = all topics)
        requested_count: Count after generation self-correction
        default_mark_per_question: Fallback mark value
        questions: Selected questions in display order
        marks: Resolved marks, parallel to questions
    """

    name: str
    difficulty: Difficulty
    topic_filter: frozenset[str]
    requested_count: int
    default_mark_per_question: int
    questions: tuple[Question, ...]
    marks: tuple[Marks, ...]

    def __post_init__(self) -> None:
        if len(self.questions) != len(self.marks):
            raise ValueError(
                f"Section {self.name!r}: {len(self.questions)} questions "
                f"but {len(self.marks)} marks"
            )

    @classmethod
    def of(cls, section: SectionSpec) -> SectionSnapshot:
        """Take a point-in-time copy of a live section."""
        return cls(
            name=section.name,
            difficulty=section.difficulty,
            topic_filter=section.topic_filter,
            requested_count=section.requested_count,
            default_mark_per_question=section.default_mark_per_question,
            questions=tuple(section.selected_questions),
            marks=section.marks,
        )

    @cached_property
    def subtotal_marks(self) -> int:
        return Marks.total(self.marks)

    def to_dict(self) -> dict[str, Any]:
        """Submission payload for one section; each question carries its resolved mark."""
        return {
            "name": self.name,
            "difficulty": self.difficulty.value,
            "groups": sorted(self.topic_filter),
            "question_count": self.requested_count,
            "marks": self.subtotal_marks,
            "questions": [
                {
                    "text": q.text,
                    "type": q.type.value,
                    "correct_answer": q.correct_answer,
                    "difficulty": q.difficulty.value,
                    "group": q.group,
                    "positive_marks": m.value,
                }
                for q, m in zip(self.questions, self.marks)
            ],
        }


@dataclass(frozen=True)
class FinalizedPaper:
    """
    Immutable assembled paper handed to a submission adapter.

    Attributes:
        metadata: Validated paper metadata
        sections: Section snapshots in display order

    Invariants:
        - total_marks is always calculated from sections, never stored

    Example:
        >>> paper = assembler.finalize(PaperMetadata("Midterm", "AI-101", 1, 30))
        >>> paper.total_marks
        36
    """

    metadata: PaperMetadata
    sections: tuple[SectionSnapshot, ...] = field(default_factory=tuple)

    @cached_property
    def total_marks(self) -> int:
        """Sum of section subtotals."""
        return sum(s.subtotal_marks for s in self.sections)

    @property
    def paper_name(self) -> str:
        return self.metadata.paper_name

    @property
    def duration_minutes(self) -> int:
        return self.metadata.duration_minutes

    @property
    def question_count(self) -> int:
        return sum(len(s.questions) for s in self.sections)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the submission payload.

        Returns:
            Dict with metadata, duration, total marks and sections
        """
        d = self.metadata.to_dict()
        d["duration_minutes"] = self.duration_minutes
        d["total_marks"] = self.total_marks
        d["sections"] = [s.to_dict() for s in self.sections]
        return d

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"FinalizedPaper({self.paper_name!r}, sections={len(self.sections)}, "
            f"questions={self.question_count}, marks={self.total_marks})"
        )
