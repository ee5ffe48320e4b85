"""
Module: assembler.paper_assembler

Purpose:
    Own a paper draft: ordered sections, draft metadata and the derived
    paper total. Produce the immutable FinalizedPaper and hand it to a
    submission adapter.

    Draft → (add/edit/generate sections) → finalize → submit

Key Classes:
    - PaperAssembler: The draft object; every mutation is a named method

Dependencies:
    - assembler.sections: section operations
    - assembler.submission: adapter protocol
    - core.schemas.validator: metadata and snapshot validation

Used By:
    - Presentation layer / callers driving an editing session
    - storage.draft_cache: snapshots keyed by paper name

Invariants:
    - total_marks == sum of section subtotals at every read
    - finalize never mutates the draft; a failed finalize or submit leaves
      the draft editable and unchanged
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Optional, Sequence

from paper_toolkit.core.models import (
    FinalizedPaper,
    PaperMetadata,
    Question,
    SectionSnapshot,
    SectionSpec,
)
from paper_toolkit.core.schemas.validator import (
    DRAFT_SCHEMA_VERSION,
    validate_draft,
    validate_metadata,
)

from .config import AssemblerConfig
from .fields import ALL_TOPICS, parse_lenient_int
from .sections import (
    FieldUpdateError,
    GenerationResult,
    create_section,
    generate_section,
    update_section_field,
)
from .submission import SubmissionAdapter, SubmissionError, SubmissionResult

logger = logging.getLogger(__name__)

_TEXT_METADATA = ("template_name", "paper_name", "instructions")
_NUMERIC_METADATA = ("hours", "minutes")


class PaperAssembler:
    """
    Paper draft and assembly operations.

    Attributes:
        bank: Read-only question bank supplied at construction
        config: Assembler configuration

    Example:
        >>> assembler = PaperAssembler(bank, AssemblerConfig(seed=1))
        >>> assembler.add_section()
        >>> assembler.update_section(0, "difficulty", "Hard")
        >>> result = assembler.generate_section(0)
        >>> paper = assembler.finalize(PaperMetadata("Final", "AI-2024", 2, 0))
    """

    def __init__(
        self,
        bank: Sequence[Question],
        config: Optional[AssemblerConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        metadata: Optional[PaperMetadata] = None,
    ) -> None:
        self.config = config or AssemblerConfig()
        self._bank: tuple[Question, ...] = tuple(bank)
        self._rng = rng or random.Random(self.config.seed)
        self._metadata = metadata or PaperMetadata()
        self._sections: list[SectionSpec] = []
        self._total_marks = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Read-only views
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def bank(self) -> tuple[Question, ...]:
        return self._bank

    @property
    def metadata(self) -> PaperMetadata:
        return self._metadata

    @property
    def sections(self) -> tuple[SectionSpec, ...]:
        return tuple(self._sections)

    @property
    def total_marks(self) -> int:
        """Paper total, folded from the sections on every read."""
        return self.recompute_total_marks()

    def section(self, index: int) -> SectionSpec:
        """Section at a 0-based index."""
        self._check_index(index)
        return self._sections[index]

    def topic_options(self) -> list[str]:
        """
        Topic choices for a section editor.

        Returns:
            ALL_TOPICS sentinel first, then distinct bank topics sorted
        """
        return [ALL_TOPICS] + sorted({q.group for q in self._bank if q.group})

    # ─────────────────────────────────────────────────────────────────────────
    # Section operations
    # ─────────────────────────────────────────────────────────────────────────

    def add_section(self) -> SectionSpec:
        """Append a default section named by its position."""
        section = create_section(len(self._sections) + 1, self.config)
        self._sections.append(section)
        self.recompute_total_marks()
        logger.debug(f"Added {section.name}")
        return section

    def remove_section(self, index: int) -> SectionSpec:
        """
        Remove a section.

        Sections still carrying their default name are renamed to their
        new position; user-edited names are left as they are.

        Returns:
            The removed section
        """
        self._check_index(index)
        removed = self._sections.pop(index)
        for position, section in enumerate(self._sections, start=1):
            if section.name_is_default:
                section.rename(self.config.section_name(position), user_edit=False)
        self.recompute_total_marks()
        logger.debug(f"Removed {removed.name}; paper total now {self._total_marks}")
        return removed

    def update_section(self, index: int, field: str, value: Any) -> None:
        """
        Update one section field from form input.

        Raises:
            IndexError: If index is out of range
            FieldUpdateError: If the field is unknown or the value invalid
        """
        update_section_field(self.section(index), field, value)
        self.recompute_total_marks()

    def can_generate(self, index: int) -> bool:
        """True when the section has a non-zero question count."""
        return self.section(index).requested_count > 0

    def generate_section(self, index: int) -> GenerationResult:
        """
        Sample questions for one section and refresh the paper total.

        Returns:
            GenerationResult; `shortfall` is set when the bank was short
        """
        result = generate_section(self.section(index), self._bank, rng=self._rng)
        self.recompute_total_marks()
        return result

    def recompute_total_marks(self) -> int:
        """Sum of section subtotals."""
        self._total_marks = sum(s.subtotal_marks for s in self._sections)
        return self._total_marks

    # ─────────────────────────────────────────────────────────────────────────
    # Metadata
    # ─────────────────────────────────────────────────────────────────────────

    def update_metadata(self, **fields: Any) -> PaperMetadata:
        """
        Edit draft metadata.

        hours and minutes use the lenient parsing policy; text fields are
        stored as given.

        Raises:
            FieldUpdateError: If a field name is unknown
        """
        unknown = set(fields) - set(_TEXT_METADATA) - set(_NUMERIC_METADATA)
        if unknown:
            raise FieldUpdateError(f"Unknown metadata fields: {sorted(unknown)}")

        changes: dict[str, Any] = {}
        for name, value in fields.items():
            if name in _NUMERIC_METADATA:
                changes[name] = parse_lenient_int(value)
            else:
                changes[name] = "" if value is None else str(value)
        self._metadata = replace(self._metadata, **changes)
        return self._metadata

    # ─────────────────────────────────────────────────────────────────────────
    # Finalize / submit
    # ─────────────────────────────────────────────────────────────────────────

    def finalize(self, metadata: Optional[PaperMetadata] = None) -> FinalizedPaper:
        """
        Validate and snapshot the draft.

        Args:
            metadata: Metadata to finalize with; the draft metadata if omitted

        Returns:
            FinalizedPaper holding a point-in-time copy of every section

        Raises:
            ValidationError: If template_name or paper_name is empty or the
                duration is not positive. The draft is not modified.
        """
        metadata = metadata or self._metadata
        validate_metadata(metadata.to_dict())

        paper = FinalizedPaper(
            metadata=metadata,
            sections=tuple(SectionSnapshot.of(s) for s in self._sections),
        )
        logger.info(
            f"Finalized {paper.paper_name!r}: {len(paper.sections)} sections, "
            f"{paper.question_count} questions, {paper.total_marks} marks"
        )
        return paper

    def submit(
        self,
        adapter: SubmissionAdapter,
        credential: Any,
        metadata: Optional[PaperMetadata] = None,
    ) -> SubmissionResult:
        """
        Finalize the draft and hand it to a submission adapter.

        Adapter failures are returned, not raised; the draft stays in
        memory either way.

        Raises:
            ValidationError: If finalize fails (nothing is submitted)
        """
        paper = self.finalize(metadata)
        try:
            result = adapter.submit(paper, credential)
        except SubmissionError as e:
            result = SubmissionResult.failure(str(e))

        if result.ok:
            logger.info(f"Submitted {paper.paper_name!r}")
        else:
            logger.warning(f"Submission of {paper.paper_name!r} failed: {result.reason}")
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Draft snapshots
    # ─────────────────────────────────────────────────────────────────────────

    def to_snapshot(self) -> dict[str, Any]:
        """
        Serializable draft state for the draft cache.

        Returns:
            Dict matching draft.schema.json
        """
        return {
            "schema_version": DRAFT_SCHEMA_VERSION,
            "metadata": self._metadata.to_dict(),
            "total_marks": self.total_marks,
            "sections": [s.to_dict() for s in self._sections],
        }

    @classmethod
    def from_snapshot(
        cls,
        data: dict[str, Any],
        bank: Sequence[Question],
        config: Optional[AssemblerConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> PaperAssembler:
        """
        Resume a draft from a snapshot.

        Selected questions are matched to bank questions by id so identity
        survives the round trip; questions no longer in the bank are
        rebuilt from the snapshot. Subtotals and the total are recomputed.

        Raises:
            ValidationError: If the snapshot fails schema validation
        """
        validate_draft(data)
        assembler = cls(
            bank,
            config,
            rng=rng,
            metadata=PaperMetadata.from_dict(data["metadata"]),
        )
        by_id = {q.id: q for q in assembler.bank}
        assembler._sections = [
            SectionSpec.from_dict(item, resolve=by_id) for item in data["sections"]
        ]
        assembler.recompute_total_marks()
        return assembler

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._sections):
            raise IndexError(
                f"Section index {index} out of range (paper has {len(self._sections)} sections)"
            )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"PaperAssembler({self._metadata.paper_name!r}, "
            f"sections={len(self._sections)}, marks={self.total_marks})"
        )
