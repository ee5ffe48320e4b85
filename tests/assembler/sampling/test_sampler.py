"""
Unit Tests for the Question Sampler

Tests for filtering, topic resolution, shortfalls and the partial shuffle.
"""

import logging
import random

import pytest

from paper_toolkit.assembler.sampling import (
    filter_questions,
    partial_shuffle,
    resolve_topics,
    sample_questions,
)
from paper_toolkit.core.models import Difficulty, Question, QuestionType


def make_question(qid: str, group: str, difficulty: Difficulty = Difficulty.MEDIUM) -> Question:
    """Helper to create test questions."""
    return Question(
        id=qid,
        text=f"Question {qid}?",
        group=group,
        difficulty=difficulty,
        type=QuestionType.MCQ,
        positive_marks=4,
    )


@pytest.fixture
def bank() -> list[Question]:
    medium = [make_question(f"m{i}", "A" if i <= 5 else "B") for i in range(1, 11)]
    hard = [make_question(f"h{i}", "X", Difficulty.HARD) for i in (1, 2)]
    return medium + hard


class TestResolveTopics:

    def test_resolve_when_filter_empty_then_all_bank_topics(self, bank):
        assert resolve_topics(bank, ()) == frozenset({"A", "B", "X"})

    def test_resolve_when_filter_given_then_verbatim(self, bank):
        assert resolve_topics(bank, ["B", "Z"]) == frozenset({"B", "Z"})


class TestFilterQuestions:

    def test_filter_when_difficulty_and_topic_then_exact_match_only(self, bank):
        result = filter_questions(bank, Difficulty.MEDIUM, frozenset({"B"}))
        assert [q.id for q in result] == ["m6", "m7", "m8", "m9", "m10"]

    def test_filter_when_topic_absent_then_empty(self, bank):
        assert filter_questions(bank, Difficulty.HARD, frozenset({"A"})) == []


class TestPartialShuffle:

    def test_shuffle_when_k_zero_then_empty(self):
        assert partial_shuffle([1, 2, 3], 0, random.Random(0)) == []

    def test_shuffle_when_k_equals_n_then_permutation(self):
        pool = list(range(10))
        result = partial_shuffle(pool, 10, random.Random(0))
        assert sorted(result) == list(range(10))

    def test_shuffle_when_same_seed_then_same_draw(self):
        first = partial_shuffle(list(range(20)), 5, random.Random(99))
        second = partial_shuffle(list(range(20)), 5, random.Random(99))
        assert first == second


class TestSampleQuestions:
    """Tests for sample_questions function."""

    def test_sample_when_enough_candidates_then_exact_count_distinct(self, bank, rng):
        result = sample_questions(bank, Difficulty.MEDIUM, 5, ["A", "B"], rng=rng)

        assert result.fulfilled
        assert result.count == 5
        assert len({q.id for q in result.selected}) == 5
        assert result.available == 10
        assert result.shortfall is None
        assert all(q.difficulty is Difficulty.MEDIUM for q in result.selected)

    def test_sample_when_shortfall_then_returns_all_available(self, bank, rng, caplog):
        with caplog.at_level(logging.WARNING):
            result = sample_questions(bank, Difficulty.HARD, 5, ["X"], rng=rng)

        assert not result.fulfilled
        assert {q.id for q in result.selected} == {"h1", "h2"}
        assert result.shortfall.found == 2
        assert result.shortfall.requested == 5
        assert result.shortfall.missing == 3
        assert "Found 2, needed 5" in caplog.text

    def test_sample_when_count_zero_then_empty_and_fulfilled(self, bank, rng):
        result = sample_questions(bank, Difficulty.MEDIUM, 0, rng=rng)
        assert result.selected == ()
        assert result.fulfilled
        assert result.available == 10

    def test_sample_when_negative_count_then_raises_error(self, bank):
        with pytest.raises(ValueError, match="non-negative"):
            sample_questions(bank, Difficulty.MEDIUM, -1)

    def test_sample_when_no_difficulty_match_then_empty_shortfall(self, bank, rng):
        result = sample_questions(bank, Difficulty.EASY, 3, rng=rng)
        assert result.selected == ()
        assert result.shortfall.found == 0

    def test_sample_when_empty_filter_then_same_as_all_topics(self, bank):
        implicit = sample_questions(bank, Difficulty.MEDIUM, 4, (), rng=random.Random(5))
        explicit = sample_questions(bank, Difficulty.MEDIUM, 4, ["A", "B", "X"], rng=random.Random(5))
        assert [q.id for q in implicit.selected] == [q.id for q in explicit.selected]

    def test_sample_when_called_then_bank_unchanged(self, bank, rng):
        before = list(bank)
        sample_questions(bank, Difficulty.MEDIUM, 5, rng=rng)
        assert bank == before

    def test_sample_when_exact_available_then_all_selected_fulfilled(self, bank, rng):
        result = sample_questions(bank, Difficulty.HARD, 2, rng=rng)
        assert result.fulfilled
        assert {q.id for q in result.selected} == {"h1", "h2"}

    def test_sample_when_topic_is_bare_string_then_matches_whole_topic(self, rng):
        robotics = [make_question(f"r{i}", "Robotics") for i in range(3)]

        result = sample_questions(robotics, Difficulty.MEDIUM, 3, "Robotics", rng=rng)

        assert result.fulfilled
        assert result.topics == frozenset({"Robotics"})
