"""
Core Models Package

Validated data models shared across the toolkit.

**DESIGN RATIONALE:**

Bank and output models are frozen dataclasses. This ensures:
1. The question bank is never mutated by the assembler
2. A finalized paper is a true point-in-time snapshot
3. Values are safe to hand to external collaborators

`SectionSpec` is the one mutable model: it is the editable part of a draft
and only changes through the operations in `paper_toolkit.assembler`.

| Model | Mutable | Owner |
|-------|---------|-------|
| `Question` | no | question bank |
| `Marks` | no | resolved per selected question |
| `SectionSpec` | yes | `PaperAssembler` |
| `SectionSnapshot` | no | `FinalizedPaper` |
| `PaperMetadata` | no | `PaperAssembler` draft / finalize |
| `FinalizedPaper` | no | submission adapter |
"""

from .enums import Difficulty, QuestionType
from .marks import Marks
from .questions import Question
from .sections import SectionSpec
from .paper import PaperMetadata, SectionSnapshot, FinalizedPaper

__all__ = [
    "Difficulty",
    "QuestionType",
    "Marks",
    "Question",
    "SectionSpec",
    "PaperMetadata",
    "SectionSnapshot",
    "FinalizedPaper",
]
