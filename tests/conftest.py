import random
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import paper_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from paper_toolkit.core.models import Difficulty, PaperMetadata, Question, QuestionType


def make_question(
    qid: str,
    group: str = "A",
    difficulty: Difficulty = Difficulty.MEDIUM,
    marks: int | None = 4,
    qtype: QuestionType = QuestionType.MCQ,
) -> Question:
    """Helper to create test questions."""
    return Question(
        id=qid,
        text=f"Question {qid}?",
        group=group,
        difficulty=difficulty,
        type=qtype,
        correct_answer=f"Answer {qid}",
        positive_marks=marks,
    )


# Common test fixtures
@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def mixed_bank() -> list[Question]:
    """
    Bank with every difficulty represented.

    Medium: 10 questions over topics A and B (marks 4, or None for m9/m10)
    Hard: 2 questions in topic X
    Easy: 3 questions in topic C
    """
    medium = [
        make_question(f"m{i}", group="A" if i <= 5 else "B", marks=4 if i <= 8 else None)
        for i in range(1, 11)
    ]
    hard = [make_question(f"h{i}", group="X", difficulty=Difficulty.HARD, marks=8) for i in (1, 2)]
    easy = [make_question(f"e{i}", group="C", difficulty=Difficulty.EASY, marks=2) for i in (1, 2, 3)]
    return medium + hard + easy


@pytest.fixture
def valid_metadata() -> PaperMetadata:
    return PaperMetadata(
        template_name="Midterm",
        paper_name="AI-101 Midterm",
        hours=1,
        minutes=30,
        instructions="Answer all questions.",
    )
