"""
Question Paper Toolkit Core Package

Shared data models, validation and serialization. These models are the
single source of truth for the assembler, storage and review packages.

**DESIGN NOTES:**

1. **Immutable Bank Data**
   - Questions are frozen dataclasses; the core never mutates the bank.
   - Question identity is the object (or its id), never content equality.

2. **Calculated Marks (Never Hand-Edited)**
   - Section subtotals are recomputed by every operation that changes them.
   - Paper totals are a fold over section subtotals.

3. **Explicit Draft Object**
   - All editable state lives in a `PaperAssembler` and its `SectionSpec`s.
   - Mutation happens only through named operations.
"""

from .models import (
    Difficulty,
    QuestionType,
    Marks,
    Question,
    SectionSpec,
    SectionSnapshot,
    PaperMetadata,
    FinalizedPaper,
)

__all__ = [
    "Difficulty",
    "QuestionType",
    "Marks",
    "Question",
    "SectionSpec",
    "SectionSnapshot",
    "PaperMetadata",
    "FinalizedPaper",
]
