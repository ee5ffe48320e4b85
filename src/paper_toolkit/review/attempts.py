"""
Module: review.attempts

Purpose:
    Review one student's recorded attempt. Attempt records come from the
    backend in several shapes, so correctness counts, titles and marks are
    resolved through ordered fallbacks. Only a single attempt is reviewed
    here; nothing aggregates across students.

Key Functions:
    - summarize_attempt(): Correct / wrong counts from any record shape
    - review_attempt(): Display-ready view of one attempt
    - format_elapsed(): "42s" / "3m 5s" / "N/A"

Key Classes:
    - AttemptSummary: Correct / wrong counts with accuracy
    - ResponseReview: One answered question
    - AttemptReview: Full view of an attempt
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

UNTITLED_PAPER = "Untitled Paper"
NOT_AVAILABLE = "N/A"

# Nested objects that may carry the stats, in lookup order
_NESTED_STATS_KEYS = ("stats", "result", "summary", "performance")

# (correct key, wrong key) pairs accepted inside the nested stats object
_NESTED_COUNT_KEYS = (
    ("correctCount", "wrongCount"),
    ("correct", "wrong"),
    ("correctAnswers", "wrongAnswers"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _first(*values: Any) -> Any:
    """First truthy value, or None."""
    for value in values:
        if value:
            return value
    return None


def _first_present(*values: Any) -> Any:
    """First value that is not None, or None."""
    for value in values:
        if value is not None:
            return value
    return None


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class AttemptSummary:
    """
    Correct / wrong counts for one attempt.

    Counts may be marks rather than questions when the record only
    carries a marks snapshot.
    """

    correct: float = 0
    wrong: float = 0

    @property
    def total(self) -> float:
        return self.correct + self.wrong

    @property
    def accuracy(self) -> int:
        """Percentage correct, rounded half up; 0 when there is nothing to count."""
        if self.total <= 0:
            return 0
        return int(math.floor(self.correct / self.total * 100 + 0.5))


def _from_marks(obtained: Any, snapshot: Any) -> Optional[AttemptSummary]:
    if _is_number(obtained) and _is_number(snapshot):
        return AttemptSummary(correct=obtained, wrong=max(snapshot - obtained, 0))
    return None


def _from_responses(items: list) -> AttemptSummary:
    correct = 0
    for item in items:
        item = _as_mapping(item)
        if (
            item.get("isCorrect") is True
            or item.get("correct") is True
            or item.get("status") == "correct"
            or item.get("isCorrectAnswer") is True
        ):
            correct += 1
    return AttemptSummary(correct=correct, wrong=len(items) - correct)


def summarize_attempt(record: Optional[Mapping[str, Any]]) -> AttemptSummary:
    """
    Resolve correct / wrong counts for an attempt record.

    Lookup order:
    1. Top-level correctCount / wrongCount
    2. Top-level totalMarksObtained / totalMarksSnapshot (marks as units)
    3. The first nested stats object (stats, result, summary, performance):
       count pairs, then marks snapshot, then correct/wrong spellings
    4. totalQuestions with correct, top-level then nested
    5. Per-response correctness flags in questions or responses

    Args:
        record: Attempt record as returned by the backend, or None

    Returns:
        AttemptSummary; zero counts if nothing usable was found
    """
    if not record:
        return AttemptSummary()

    if _is_number(record.get("correctCount")) and _is_number(record.get("wrongCount")):
        return AttemptSummary(correct=record["correctCount"], wrong=record["wrongCount"])

    summary = _from_marks(record.get("totalMarksObtained"), record.get("totalMarksSnapshot"))
    if summary is not None:
        return summary

    nested = _as_mapping(_first_present(*(record.get(k) for k in _NESTED_STATS_KEYS)))

    correct_key, wrong_key = _NESTED_COUNT_KEYS[0]
    if _is_number(nested.get(correct_key)) and _is_number(nested.get(wrong_key)):
        return AttemptSummary(correct=nested[correct_key], wrong=nested[wrong_key])

    summary = _from_marks(nested.get("totalMarksObtained"), nested.get("totalMarksSnapshot"))
    if summary is not None:
        return summary

    for correct_key, wrong_key in _NESTED_COUNT_KEYS[1:]:
        if _is_number(nested.get(correct_key)) and _is_number(nested.get(wrong_key)):
            return AttemptSummary(correct=nested[correct_key], wrong=nested[wrong_key])

    for source in (record, nested):
        if _is_number(source.get("totalQuestions")) and _is_number(source.get("correct")):
            return AttemptSummary(
                correct=source["correct"],
                wrong=source["totalQuestions"] - source["correct"],
            )

    items = _first_present(record.get("questions"), record.get("responses"))
    if isinstance(items, list) and items:
        return _from_responses(items)

    return AttemptSummary()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (a trailing "Z" is accepted); None if unusable."""
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_elapsed(start: Optional[datetime], end: Optional[datetime]) -> str:
    """
    Human-readable attempt duration.

    Returns:
        "42s" under a minute, "3m 5s" otherwise, "N/A" when either end is
        missing or the end precedes the start
    """
    if start is None or end is None:
        return NOT_AVAILABLE
    try:
        ms = int((end - start).total_seconds() * 1000)
    except TypeError:
        # naive vs aware timestamps
        return NOT_AVAILABLE
    if ms < 0:
        return NOT_AVAILABLE
    mins = ms // 60000
    secs = (ms % 60000) // 1000
    if mins <= 0:
        return f"{secs}s"
    return f"{mins}m {secs}s"


@dataclass(frozen=True)
class ResponseReview:
    """One answered question within an attempt."""

    question_id: Optional[str]
    student_answer: Optional[str]
    marks_awarded: Optional[float]
    is_correct: bool

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> ResponseReview:
        marks = record.get("marksAwarded")
        return cls(
            question_id=record.get("questionId"),
            student_answer=record.get("studentAnswer") or None,
            marks_awarded=marks if _is_number(marks) else None,
            is_correct=bool(record.get("isCorrect")),
        )


@dataclass(frozen=True)
class AttemptReview:
    """
    Display-ready view of one attempt.

    Attributes:
        attempt_id: Backend id of the attempt
        paper_title: Resolved title, "Untitled Paper" if none
        student_name: Resolved student name
        student_email: Student email if known
        status: Attempt status string if present
        marks_obtained: Marks scored (0 when absent)
        marks_available: Paper total or marks snapshot, if known
        started_at / ended_at: Parsed start and end timestamps
        recorded_at: Date shown in attempt lists (start, creation or date)
        summary: Correct / wrong counts
        responses: Per-question responses
    """

    attempt_id: Optional[str]
    paper_title: str
    student_name: Optional[str]
    student_email: Optional[str]
    status: Optional[str]
    marks_obtained: float
    marks_available: Optional[float]
    started_at: Optional[datetime]
    ended_at: Optional[datetime]
    recorded_at: Optional[datetime]
    summary: AttemptSummary
    responses: tuple[ResponseReview, ...] = field(default_factory=tuple)

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def elapsed(self) -> str:
        return format_elapsed(self.started_at, self.ended_at)


def paper_title(record: Mapping[str, Any]) -> str:
    """Title of the attempted paper, falling back through known keys."""
    paper = _as_mapping(record.get("paper"))
    return _first(
        paper.get("paperName"),
        record.get("paperName"),
        record.get("paperTitle"),
        record.get("title"),
        paper.get("title"),
        paper.get("name"),
    ) or UNTITLED_PAPER


def review_attempt(
    record: Mapping[str, Any],
    student: Optional[Mapping[str, Any]] = None,
) -> AttemptReview:
    """
    Build the review of one attempt.

    Args:
        record: Attempt record (list entry or detail response)
        student: The student selected in the caller, used when the record
            does not embed student details

    Returns:
        AttemptReview
    """
    paper = _as_mapping(record.get("paper"))
    embedded = _as_mapping(record.get("student"))
    selected = _as_mapping(student)

    raw_responses = record.get("responses")
    responses = tuple(
        ResponseReview.from_record(_as_mapping(r))
        for r in (raw_responses if isinstance(raw_responses, list) else [])
    )

    obtained = record.get("totalMarksObtained")
    available = _first_present(paper.get("totalMarks"), record.get("totalMarksSnapshot"))

    return AttemptReview(
        attempt_id=_first(record.get("_id"), record.get("id")),
        paper_title=paper_title(record),
        student_name=_first(
            embedded.get("name"),
            embedded.get("fullName"),
            selected.get("name"),
            selected.get("fullName"),
            embedded.get("email"),
            selected.get("email"),
        ),
        student_email=_first(embedded.get("email"), selected.get("email")),
        status=record.get("status") or None,
        marks_obtained=obtained if _is_number(obtained) else 0,
        marks_available=available if _is_number(available) else None,
        started_at=parse_timestamp(record.get("startTime")),
        ended_at=parse_timestamp(record.get("endTime")),
        recorded_at=parse_timestamp(
            _first(
                record.get("startTime"),
                record.get("createdAt"),
                record.get("date"),
                record.get("createdOn"),
            )
        ),
        summary=summarize_attempt(record),
        responses=responses,
    )
