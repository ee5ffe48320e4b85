"""
Module: storage.paper_store

Purpose:
    Submission adapter that keeps finalized papers in a local JSON file.
    A paper submitted again under the same name replaces the stored copy.

Key Classes:
    - LocalPaperStore: SubmissionAdapter backed by one JSON document

Dependencies:
    - storage.file_locking: locked JSON read-modify-write
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from paper_toolkit.assembler.submission import SubmissionResult
from paper_toolkit.core.models import FinalizedPaper

from .file_locking import locked_read_modify_write_json, read_json_locked

logger = logging.getLogger(__name__)


def _empty_store() -> dict[str, Any]:
    return {"papers": []}


class LocalPaperStore:
    """
    Local submission target.

    The credential is accepted for interface compatibility and not used.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def submit(self, paper: FinalizedPaper, credential: Any) -> SubmissionResult:
        payload = paper.to_dict()
        payload["submitted_at"] = datetime.now(timezone.utc).isoformat()

        def upsert(existing: dict[str, Any]) -> dict[str, Any]:
            papers = existing.setdefault("papers", [])
            for i, stored in enumerate(papers):
                if stored.get("paper_name") == paper.paper_name:
                    papers[i] = payload
                    break
            else:
                papers.append(payload)
            return existing

        try:
            locked_read_modify_write_json(self.path, upsert, default=_empty_store)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to save paper {paper.paper_name!r}: {e}")
            return SubmissionResult.failure(f"Failed to save paper: {e}")

        logger.info(f"Paper {paper.paper_name!r} saved locally under {self.path.name}")
        return SubmissionResult.success(reference=paper.paper_name)

    def papers(self) -> list[dict[str, Any]]:
        """All stored paper payloads in submission order."""
        return list(read_json_locked(self.path, default=_empty_store).get("papers", []))

    def get(self, paper_name: str) -> Optional[dict[str, Any]]:
        """Stored payload for a paper name, or None."""
        for stored in self.papers():
            if stored.get("paper_name") == paper_name:
                return stored
        return None
