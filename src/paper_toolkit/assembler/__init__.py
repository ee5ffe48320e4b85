"""
Module: assembler

Purpose:
    Question paper assembly engine. Samples questions from a bank into
    configurable sections, keeps section and paper mark totals in step
    with every edit, and finalizes an immutable paper for submission.

Key Functions:
    - sample_questions(): Pure difficulty/topic sampler
    - create_section() / update_section_field() / generate_section()
    - load_question_bank(): Load the question bank

Key Classes:
    - PaperAssembler: Paper draft and finalize/submit
    - AssemblerConfig: Section defaults and sampling seed
    - SubmissionAdapter: Protocol for the external submission step

Dependencies:
    - paper_toolkit.core.models: Question, SectionSpec, FinalizedPaper
    - paper_toolkit.core.schemas.validator: Metadata / snapshot validation
"""

from .config import AssemblerConfig, load_config
from .fields import ALL_TOPICS, parse_lenient_int, parse_topic_filter
from .sampling import sample_questions, SampleResult, Shortfall
from .sections import (
    create_section,
    update_section_field,
    generate_section,
    GenerationResult,
    FieldUpdateError,
)
from .submission import SubmissionAdapter, SubmissionResult, SubmissionError
from .paper_assembler import PaperAssembler
from .loading import load_question_bank, load_sample_bank, LoaderError

__all__ = [
    # Config
    "AssemblerConfig",
    "load_config",
    # Field parsing
    "ALL_TOPICS",
    "parse_lenient_int",
    "parse_topic_filter",
    # Sampling
    "sample_questions",
    "SampleResult",
    "Shortfall",
    # Sections
    "create_section",
    "update_section_field",
    "generate_section",
    "GenerationResult",
    "FieldUpdateError",
    # Submission
    "SubmissionAdapter",
    "SubmissionResult",
    "SubmissionError",
    # Assembler
    "PaperAssembler",
    # Loading
    "load_question_bank",
    "load_sample_bank",
    "LoaderError",
]
