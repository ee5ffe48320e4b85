"""
Unit Tests for Attempt Review

Tests for correctness count resolution across record shapes, elapsed
time formatting and the single-attempt review view.
"""

from datetime import datetime, timezone

import pytest

from paper_toolkit.review import (
    AttemptSummary,
    format_elapsed,
    paper_title,
    parse_timestamp,
    review_attempt,
    summarize_attempt,
)


class TestAttemptSummary:

    @pytest.mark.parametrize(
        "correct, wrong, expected",
        [(3, 1, 75), (1, 2, 33), (2, 1, 67), (1, 7, 13), (0, 0, 0), (5, 0, 100)],
    )
    def test_accuracy_when_counts_then_rounded_percentage(self, correct, wrong, expected):
        assert AttemptSummary(correct, wrong).accuracy == expected

    def test_accuracy_when_exact_half_then_rounds_up(self):
        # 1 of 8 is 12.5%
        assert AttemptSummary(1, 7).accuracy == 13


class TestSummarizeAttempt:
    """Tests for summarize_attempt lookup order."""

    def test_summarize_when_none_then_zero(self):
        assert summarize_attempt(None) == AttemptSummary(0, 0)

    def test_summarize_when_top_level_counts_then_used_first(self):
        record = {"correctCount": 4, "wrongCount": 1, "totalMarksObtained": 10, "totalMarksSnapshot": 20}
        assert summarize_attempt(record) == AttemptSummary(4, 1)

    def test_summarize_when_marks_snapshot_then_marks_as_units(self):
        record = {"totalMarksObtained": 12, "totalMarksSnapshot": 20}
        assert summarize_attempt(record) == AttemptSummary(12, 8)

    def test_summarize_when_obtained_exceeds_snapshot_then_wrong_zero(self):
        record = {"totalMarksObtained": 25, "totalMarksSnapshot": 20}
        assert summarize_attempt(record).wrong == 0

    @pytest.mark.parametrize("key", ["stats", "result", "summary", "performance"])
    def test_summarize_when_nested_counts_then_used(self, key):
        record = {key: {"correctCount": 2, "wrongCount": 3}}
        assert summarize_attempt(record) == AttemptSummary(2, 3)

    def test_summarize_when_nested_alternate_spelling_then_used(self):
        assert summarize_attempt({"result": {"correctAnswers": 6, "wrongAnswers": 2}}) == AttemptSummary(6, 2)
        assert summarize_attempt({"summary": {"correct": 1, "wrong": 1}}) == AttemptSummary(1, 1)

    def test_summarize_when_nested_marks_then_used(self):
        record = {"stats": {"totalMarksObtained": 8, "totalMarksSnapshot": 10}}
        assert summarize_attempt(record) == AttemptSummary(8, 2)

    def test_summarize_when_total_questions_then_wrong_derived(self):
        assert summarize_attempt({"totalQuestions": 10, "correct": 7}) == AttemptSummary(7, 3)

    def test_summarize_when_responses_then_flags_counted(self):
        record = {
            "responses": [
                {"isCorrect": True},
                {"correct": True},
                {"status": "correct"},
                {"isCorrectAnswer": True},
                {"isCorrect": False},
                {},
            ]
        }
        assert summarize_attempt(record) == AttemptSummary(4, 2)

    def test_summarize_when_questions_list_then_preferred_over_responses(self):
        record = {"questions": [{"isCorrect": True}], "responses": [{"isCorrect": False}] * 3}
        assert summarize_attempt(record) == AttemptSummary(1, 0)

    def test_summarize_when_counts_not_numeric_then_falls_through(self):
        record = {"correctCount": "4", "wrongCount": "1", "responses": [{"isCorrect": True}]}
        assert summarize_attempt(record) == AttemptSummary(1, 0)


class TestFormatElapsed:

    @pytest.fixture
    def start(self) -> datetime:
        return datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)

    def test_format_when_under_a_minute_then_seconds_only(self, start):
        end = start.replace(second=42)
        assert format_elapsed(start, end) == "42s"

    def test_format_when_minutes_then_minutes_and_seconds(self, start):
        end = start.replace(minute=3, second=5)
        assert format_elapsed(start, end) == "3m 5s"

    def test_format_when_missing_end_then_not_available(self, start):
        assert format_elapsed(start, None) == "N/A"

    def test_format_when_end_before_start_then_not_available(self, start):
        assert format_elapsed(start.replace(minute=5), start) == "N/A"

    def test_format_when_naive_and_aware_then_not_available(self, start):
        assert format_elapsed(datetime(2024, 5, 1, 9, 0), start) == "N/A"


class TestParseTimestamp:

    def test_parse_when_trailing_z_then_utc(self):
        parsed = parse_timestamp("2024-05-01T09:00:00Z")
        assert parsed == datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday", 12345])
    def test_parse_when_unusable_then_none(self, value):
        assert parse_timestamp(value) is None


class TestReviewAttempt:
    """Tests for review_attempt function."""

    @pytest.fixture
    def record(self) -> dict:
        return {
            "_id": "att-1",
            "paper": {"paperName": "AI-101 Midterm", "totalMarks": 36},
            "student": {"email": "sam@example.com"},
            "status": "completed",
            "totalMarksObtained": 28,
            "totalMarksSnapshot": 36,
            "startTime": "2024-05-01T09:00:00Z",
            "endTime": "2024-05-01T09:42:07Z",
            "responses": [
                {"questionId": "q1", "studentAnswer": "Perception Fusion", "marksAwarded": 4, "isCorrect": True},
                {"questionId": "q2", "studentAnswer": "", "marksAwarded": None, "isCorrect": False},
            ],
        }

    def test_review_when_full_record_then_fields_resolved(self, record):
        review = review_attempt(record)

        assert review.attempt_id == "att-1"
        assert review.paper_title == "AI-101 Midterm"
        assert review.marks_obtained == 28
        assert review.marks_available == 36
        assert review.is_completed
        assert review.elapsed == "42m 7s"
        assert review.summary == AttemptSummary(28, 8)
        assert review.recorded_at == review.started_at

    def test_review_when_embedded_student_has_only_email_then_selected_name_wins(self, record):
        review = review_attempt(record, student={"name": "Sam Patel", "email": "other@example.com"})
        assert review.student_name == "Sam Patel"
        assert review.student_email == "sam@example.com"

    def test_review_when_no_names_then_email_used(self, record):
        assert review_attempt(record).student_name == "sam@example.com"

    def test_review_when_responses_then_answers_normalized(self, record):
        responses = review_attempt(record).responses
        assert responses[0].marks_awarded == 4
        assert responses[0].is_correct
        assert responses[1].student_answer is None
        assert responses[1].marks_awarded is None

    def test_review_when_no_times_then_elapsed_not_available(self):
        review = review_attempt({"createdAt": "2024-05-02T10:00:00+00:00"})
        assert review.elapsed == "N/A"
        assert review.recorded_at == datetime(2024, 5, 2, 10, 0, tzinfo=timezone.utc)
        assert review.marks_obtained == 0
        assert review.marks_available is None
        assert review.paper_title == "Untitled Paper"


class TestPaperTitle:

    @pytest.mark.parametrize(
        "record, expected",
        [
            ({"paper": {"paperName": "P1"}, "paperName": "P2"}, "P1"),
            ({"paperName": "P2", "title": "T"}, "P2"),
            ({"paperTitle": "PT"}, "PT"),
            ({"paper": {"title": "Nested"}}, "Nested"),
            ({"paper": {"name": "N"}}, "N"),
            ({"paper": "not-a-dict"}, "Untitled Paper"),
        ],
    )
    def test_paper_title_when_keys_vary_then_first_found(self, record, expected):
        assert paper_title(record) == expected
