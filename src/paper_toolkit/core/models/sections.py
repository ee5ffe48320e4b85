"""
Module: sections

Purpose:
    Provides SectionSpec - the editable configuration of one paper section
    plus its derived results (selected questions and subtotal marks).

Key Classes:
    - SectionSpec: Mutable section state with invariant-keeping setters

Dependencies:
    - .enums.Difficulty
    - .marks.Marks
    - .questions.Question

Used By:
    - assembler.sections: create / update / generate operations
    - assembler.paper_assembler.PaperAssembler: ordered section list
    - core.models.paper.SectionSnapshot: frozen copy at finalize time

Invariants:
    - subtotal_marks == sum of resolved marks over selected_questions
    - subtotal_marks has no setter; it is recomputed by every setter that
      can change it (replace_selection, set_default_mark)
    - topic_filter is a frozenset; empty means "all topics"
    - requested_count >= 0
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .enums import Difficulty
from .marks import Marks
from .questions import Question


def _topic_set(topics: Iterable[str]) -> frozenset[str]:
    """A bare string is one topic, not a sequence of characters; blanks mean all topics."""
    if isinstance(topics, str):
        topics = (topics,)
    return frozenset(t.strip() for t in topics if t and t.strip())


class SectionSpec:
    """
    One configurable slice of a paper (mutable).

    Fields are read through properties and changed through named setters,
    each of which re-establishes the section invariants before returning.

    Example:
        >>> section = SectionSpec("Section 1")
        >>> section.replace_selection([q1, q2])
        >>> section.subtotal_marks
        12
    """

    def __init__(
        self,
        name: str,
        difficulty: Difficulty = Difficulty.MEDIUM,
        topic_filter: Iterable[str] = (),
        requested_count: int = 5,
        default_mark_per_question: int = 4,
        *,
        name_is_default: bool = True,
        selected_questions: Sequence[Question] = (),
    ) -> None:
        if requested_count < 0:
            raise ValueError(f"requested_count must be non-negative: {requested_count}")
        if default_mark_per_question < 0:
            raise ValueError(
                f"default_mark_per_question must be non-negative: {default_mark_per_question}"
            )
        self._name = name
        self._name_is_default = name_is_default
        self._difficulty = Difficulty.parse(difficulty)
        self._topic_filter = _topic_set(topic_filter)
        self._requested_count = requested_count
        self._default_mark = default_mark_per_question
        self._selected: tuple[Question, ...] = ()
        self._subtotal_marks = 0
        self.replace_selection(selected_questions)

    # ─────────────────────────────────────────────────────────────────────────
    # Read-only views
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def name_is_default(self) -> bool:
        """True until the user edits the name."""
        return self._name_is_default

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def topic_filter(self) -> frozenset[str]:
        return self._topic_filter

    @property
    def requested_count(self) -> int:
        return self._requested_count

    @property
    def default_mark_per_question(self) -> int:
        return self._default_mark

    @property
    def selected_questions(self) -> tuple[Question, ...]:
        return self._selected

    @property
    def subtotal_marks(self) -> int:
        """Sum of resolved marks over the selection. Never set directly."""
        return self._subtotal_marks

    @property
    def marks(self) -> tuple[Marks, ...]:
        """Resolved marks for each selected question, in selection order."""
        return tuple(Marks.resolve(q, self._default_mark) for q in self._selected)

    @property
    def is_generated(self) -> bool:
        return bool(self._selected)

    # ─────────────────────────────────────────────────────────────────────────
    # Setters
    # ─────────────────────────────────────────────────────────────────────────

    def rename(self, name: str, *, user_edit: bool = True) -> None:
        """Set the section name. User edits are never auto-renumbered later."""
        self._name = name
        self._name_is_default = not user_edit

    def set_difficulty(self, difficulty: Difficulty | str) -> None:
        self._difficulty = Difficulty.parse(difficulty)

    def set_topic_filter(self, topics: Iterable[str]) -> None:
        self._topic_filter = _topic_set(topics)

    def set_requested_count(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"requested_count must be non-negative: {count}")
        self._requested_count = count

    def set_default_mark(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"default_mark_per_question must be non-negative: {value}")
        self._default_mark = value
        self._recompute_subtotal()

    def replace_selection(self, questions: Sequence[Question]) -> None:
        """Replace the selection wholesale and recompute the subtotal."""
        self._selected = tuple(questions)
        self._recompute_subtotal()

    def _recompute_subtotal(self) -> None:
        self._subtotal_marks = Marks.total(self.marks)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize the editable state for a draft snapshot.

        Selected questions are embedded in full so a draft can be resumed
        even if the bank no longer contains them. subtotal_marks is written
        for readers of the snapshot but is recomputed on load.
        """
        return {
            "name": self._name,
            "name_is_default": self._name_is_default,
            "difficulty": self._difficulty.value,
            "topic_filter": sorted(self._topic_filter),
            "requested_count": self._requested_count,
            "default_mark_per_question": self._default_mark,
            "selected_questions": [q.to_dict() for q in self._selected],
            "subtotal_marks": self._subtotal_marks,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        resolve: Optional[dict[str, Question]] = None,
    ) -> SectionSpec:
        """
        Deserialize from a draft snapshot.

        Args:
            data: Dict written by to_dict()
            resolve: Optional id -> Question map; matching bank questions are
                reused so identity is preserved across a save/resume cycle

        Returns:
            SectionSpec with its subtotal recomputed from the selection
        """
        resolve = resolve or {}
        selected = [
            resolve.get(item["id"]) or Question.from_dict(item)
            for item in data.get("selected_questions", [])
        ]
        return cls(
            name=data["name"],
            difficulty=Difficulty.parse(data["difficulty"]),
            topic_filter=data.get("topic_filter", []),
            requested_count=data.get("requested_count", 0),
            default_mark_per_question=data.get("default_mark_per_question", 0),
            name_is_default=data.get("name_is_default", False),
            selected_questions=selected,
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        topics = ", ".join(sorted(self._topic_filter)) or "all topics"
        return (
            f"SectionSpec({self._name!r}, {self._difficulty.value}, {topics}, "
            f"questions={len(self._selected)}/{self._requested_count}, "
            f"marks={self._subtotal_marks})"
        )
