"""
Integration Tests for Sampling Behaviour

Statistical checks that draws are uniform without replacement, plus an
end-to-end session over the bundled sample bank.
"""

import random
from collections import Counter
from itertools import combinations

import pytest

from paper_toolkit.assembler import AssemblerConfig, PaperAssembler, load_sample_bank, sample_questions
from paper_toolkit.core.models import Difficulty, PaperMetadata, Question, QuestionType


def make_question(qid: str, group: str = "A") -> Question:
    return Question(
        id=qid,
        text=f"Question {qid}?",
        group=group,
        difficulty=Difficulty.MEDIUM,
        type=QuestionType.MCQ,
    )


class TestUniformity:
    """Each subset of the requested size should be about equally likely."""

    def test_sample_when_many_draws_then_every_subset_seen_evenly(self):
        # Arrange
        bank = [make_question(f"q{i}") for i in range(5)]
        rng = random.Random(2024)
        draws = 20000

        # Act
        counts = Counter(
            frozenset(q.id for q in sample_questions(bank, Difficulty.MEDIUM, 2, rng=rng).selected)
            for _ in range(draws)
        )

        # Assert: 10 subsets, 2000 expected each
        assert set(counts) == {frozenset(c) for c in combinations([f"q{i}" for i in range(5)], 2)}
        for count in counts.values():
            assert count == pytest.approx(draws / 10, rel=0.1)

    def test_sample_when_many_draws_then_no_duplicates(self):
        bank = [make_question(f"q{i}", group="A" if i % 2 else "B") for i in range(12)]
        rng = random.Random(7)
        for _ in range(500):
            selected = sample_questions(bank, Difficulty.MEDIUM, 6, rng=rng).selected
            assert len(set(selected)) == 6


class TestSampleBankSession:
    """A whole editing session over the bundled bank."""

    def test_session_when_two_sections_then_totals_and_finalize(self):
        bank = load_sample_bank()
        assembler = PaperAssembler(bank, AssemblerConfig(seed=1))

        assembler.add_section()
        assembler.update_section(0, "requested_count", 3)
        first = assembler.generate_section(0)

        assembler.add_section()
        assembler.update_section(1, "difficulty", "Hard")
        assembler.update_section(1, "topic_filter", ["Robotics", "NLP"])
        second = assembler.generate_section(1)

        assert first.fulfilled
        assert not second.fulfilled
        assert second.shortfall.found == 2
        assert assembler.section(1).requested_count == 2
        assert assembler.section(1).subtotal_marks == 8
        assert assembler.total_marks == assembler.section(0).subtotal_marks + 8

        paper = assembler.finalize(PaperMetadata("Final", "AI-2024 Final", 2, 0))
        assert paper.total_marks == assembler.total_marks
        assert paper.question_count == 5
