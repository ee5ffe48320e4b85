"""
Module: assembler.submission

Purpose:
    Narrow interface to the external submission step. The assembler only
    hands a FinalizedPaper and an opaque credential to an adapter; transport,
    retries and auth belong to the adapter.

Key Classes:
    - SubmissionAdapter: Protocol implemented by submission backends
    - SubmissionResult: Terminal success / failure value
    - SubmissionError: Raised by adapters for transport-level failures

Used By:
    - assembler.paper_assembler.PaperAssembler.submit
    - storage.paper_store.LocalPaperStore
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from paper_toolkit.core.models import FinalizedPaper


class SubmissionError(Exception):
    """Failure reported by a submission adapter."""
    pass


@dataclass(frozen=True)
class SubmissionResult:
    """
    Terminal outcome of one submit call.

    Attributes:
        ok: True if the adapter accepted the paper
        reason: Failure reason, surfaced verbatim to the caller
        reference: Optional adapter-specific identifier of the stored paper
    """

    ok: bool
    reason: str = ""
    reference: Optional[str] = None

    @classmethod
    def success(cls, reference: Optional[str] = None) -> SubmissionResult:
        return cls(ok=True, reference=reference)

    @classmethod
    def failure(cls, reason: str) -> SubmissionResult:
        return cls(ok=False, reason=reason)


@runtime_checkable
class SubmissionAdapter(Protocol):
    """Accepts a finalized paper for storage or submission."""

    def submit(self, paper: FinalizedPaper, credential: Any) -> SubmissionResult:
        ...
