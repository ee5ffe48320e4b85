"""
Module: assembler.sections

Purpose:
    Named operations on a single SectionSpec: create with defaults,
    update one field from form input, and generate its question selection.

Key Functions:
    - create_section(): Default section named by position
    - update_section_field(): Generic lenient field update
    - generate_section(): Sample questions and replace the selection

Key Classes:
    - GenerationResult: Outcome of one generate call
    - FieldUpdateError: Unknown field or invalid enum value

Dependencies:
    - assembler.sampling: sample_questions
    - assembler.fields: lenient parsing policy
    - paper_toolkit.core.models: SectionSpec, Question, Difficulty

Used By:
    - assembler.paper_assembler.PaperAssembler
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from paper_toolkit.core.models import Difficulty, Question, SectionSpec

from .config import AssemblerConfig
from .fields import parse_lenient_int, parse_topic_filter
from .sampling import SampleResult, Shortfall, sample_questions

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "difficulty",
    "topic_filter",
    "requested_count",
    "default_mark_per_question",
)


class FieldUpdateError(ValueError):
    """Raised for an unknown field name or an invalid difficulty label."""
    pass


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of generating one section.

    Attributes:
        section_name: Name of the generated section
        sample: Sampler result, or None when generation was skipped
        skipped: True when requested_count was 0 and nothing was sampled
        subtotal_marks: Section subtotal after the call
    """

    section_name: str
    sample: Optional[SampleResult]
    skipped: bool
    subtotal_marks: int

    @property
    def selected(self) -> tuple[Question, ...]:
        return self.sample.selected if self.sample else ()

    @property
    def fulfilled(self) -> bool:
        return self.sample.fulfilled if self.sample else False

    @property
    def shortfall(self) -> Optional[Shortfall]:
        return self.sample.shortfall if self.sample else None


def create_section(index: int, config: Optional[AssemblerConfig] = None) -> SectionSpec:
    """
    Create a default section.

    Args:
        index: 1-based position used for the default name
        config: Source of defaults (AssemblerConfig() when omitted)

    Returns:
        SectionSpec named e.g. "Section 3", Medium difficulty, all topics,
        5 questions at 4 marks by default, empty selection, subtotal 0
    """
    config = config or AssemblerConfig()
    return SectionSpec(
        name=config.section_name(index),
        difficulty=config.default_difficulty,
        topic_filter=(),
        requested_count=config.default_requested_count,
        default_mark_per_question=config.default_mark_per_question,
        name_is_default=True,
    )


def update_section_field(section: SectionSpec, field: str, value: Any) -> None:
    """
    Update one editable field from form input.

    Numeric fields use the lenient parsing policy and never raise. The
    topic filter accepts the all-topics sentinel, a single topic or a
    multi-select. All parsing happens before the section is touched.

    Args:
        section: Section to update
        field: One of EDITABLE_FIELDS
        value: Raw input value

    Raises:
        FieldUpdateError: If field is unknown, the difficulty label is not
            recognised, or the topic selection has an unsupported type
    """
    if field == "name":
        section.rename("" if value is None else str(value))
    elif field == "difficulty":
        try:
            difficulty = Difficulty.parse(value)
        except ValueError as e:
            raise FieldUpdateError(str(e)) from e
        section.set_difficulty(difficulty)
    elif field == "topic_filter":
        try:
            topics = parse_topic_filter(value)
        except TypeError as e:
            raise FieldUpdateError(str(e)) from e
        section.set_topic_filter(topics)
    elif field == "requested_count":
        section.set_requested_count(parse_lenient_int(value))
    elif field == "default_mark_per_question":
        section.set_default_mark(parse_lenient_int(value))
    else:
        raise FieldUpdateError(
            f"Unknown section field: {field!r} (expected one of {', '.join(EDITABLE_FIELDS)})"
        )


def generate_section(
    section: SectionSpec,
    bank: Sequence[Question],
    *,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """
    Populate a section from the bank.

    Callers should block the action when requested_count is 0; if such a
    call arrives anyway it is a no-op that returns an empty, skipped result.

    On success the selection is replaced wholesale, requested_count is set
    to the number actually returned (self-correcting on a shortfall) and
    the subtotal is recomputed.

    Args:
        section: Section to populate
        bank: Full question bank
        rng: Random source for the sampler

    Returns:
        GenerationResult; check `shortfall` for a best-effort warning
    """
    if section.requested_count <= 0:
        logger.warning(
            f"Skipped generation for {section.name!r}: number of questions to select is 0"
        )
        return GenerationResult(
            section_name=section.name,
            sample=None,
            skipped=True,
            subtotal_marks=section.subtotal_marks,
        )

    sample = sample_questions(
        bank,
        section.difficulty,
        section.requested_count,
        section.topic_filter,
        rng=rng,
    )

    section.replace_selection(sample.selected)
    section.set_requested_count(sample.count)

    logger.info(
        f"Generated {sample.count} questions for {section.name}. "
        f"Total marks: {section.subtotal_marks}"
    )
    return GenerationResult(
        section_name=section.name,
        sample=sample,
        skipped=False,
        subtotal_marks=section.subtotal_marks,
    )
