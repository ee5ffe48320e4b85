"""
Module: review

Purpose:
    Single-attempt review of students' recorded attempts.
"""

from .attempts import (
    AttemptSummary,
    AttemptReview,
    ResponseReview,
    summarize_attempt,
    review_attempt,
    paper_title,
    format_elapsed,
    parse_timestamp,
)

__all__ = [
    "AttemptSummary",
    "AttemptReview",
    "ResponseReview",
    "summarize_attempt",
    "review_attempt",
    "paper_title",
    "format_elapsed",
    "parse_timestamp",
]
