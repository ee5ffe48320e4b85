"""
Module: assembler.sampling

Purpose:
    Pure question sampling: difficulty/topic filtering and unbiased
    draws without replacement.

Key Functions:
    - sample_questions(): Main entry point for sampling
    - resolve_topics(): Empty topic filter -> all bank topics
    - partial_shuffle(): Partial Fisher-Yates draw

Key Classes:
    - SampleResult: Selection plus fulfilment information
    - Shortfall: Structured best-effort warning
"""

from .sampler import (
    sample_questions,
    resolve_topics,
    filter_questions,
    partial_shuffle,
    SampleResult,
    Shortfall,
)

__all__ = [
    "sample_questions",
    "resolve_topics",
    "filter_questions",
    "partial_shuffle",
    "SampleResult",
    "Shortfall",
]
