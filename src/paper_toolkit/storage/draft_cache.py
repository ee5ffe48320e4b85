"""
Module: storage.draft_cache

Purpose:
    Local draft cache. Stores PaperAssembler snapshots keyed by paper name
    in one JSON document so an editing session can be resumed later.

Key Classes:
    - DraftCache: save / load / delete / names
    - DraftCacheError: Unreadable cache file or invalid stored draft

File layout:
    {
        "version": 1,
        "drafts": {"<paper_name>": <snapshot>, ...}
    }

Dependencies:
    - storage.file_locking: locked JSON read-modify-write
    - core.schemas.validator: snapshot validation

Used By:
    - Callers persisting a PaperAssembler between sessions
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from paper_toolkit.assembler import AssemblerConfig, PaperAssembler
from paper_toolkit.core.models import Question
from paper_toolkit.core.schemas.validator import ValidationError, validate_draft

from .file_locking import locked_read_modify_write_json, read_json_locked

logger = logging.getLogger(__name__)

CACHE_VERSION = 1


class DraftCacheError(Exception):
    """Error reading or interpreting the draft cache."""
    pass


def _empty_cache() -> dict[str, Any]:
    return {"version": CACHE_VERSION, "drafts": {}}


def _draft_key(paper_name: str) -> str:
    """Cache key for a paper name; surrounding whitespace is ignored."""
    return (paper_name or "").strip()


class DraftCache:
    """
    JSON-backed store of draft snapshots keyed by paper name.

    Example:
        >>> cache = DraftCache(tmp_path / "drafts.json")
        >>> cache.save(assembler)
        >>> resumed = cache.resume("AI-101", bank)
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def save(self, draft: PaperAssembler | dict[str, Any]) -> str:
        """
        Insert or replace a draft.

        Args:
            draft: Assembler or snapshot produced by to_snapshot()

        Returns:
            The paper name the draft was stored under

        Raises:
            ValidationError: If the snapshot is invalid or has no paper name
        """
        snapshot = draft.to_snapshot() if isinstance(draft, PaperAssembler) else draft
        validate_draft(snapshot)
        key = _draft_key(snapshot["metadata"]["paper_name"])
        if not key:
            raise ValidationError(
                "Draft needs a paper name before it can be cached",
                path="metadata.paper_name",
                errors=["paper_name must be non-empty"],
            )

        def upsert(existing: dict[str, Any]) -> dict[str, Any]:
            existing.setdefault("version", CACHE_VERSION)
            existing.setdefault("drafts", {})[key] = snapshot
            return existing

        locked_read_modify_write_json(self.path, upsert, default=_empty_cache)
        logger.info(f"Draft {key!r} saved to {self.path.name}")
        return key

    def load(self, paper_name: str) -> Optional[dict[str, Any]]:
        """
        Snapshot stored under a paper name.

        Returns:
            Validated snapshot, or None if no draft has that name

        Raises:
            DraftCacheError: If the cache file or stored draft is invalid
        """
        snapshot = self._drafts().get(_draft_key(paper_name))
        if snapshot is None:
            return None
        try:
            validate_draft(snapshot)
        except ValidationError as e:
            raise DraftCacheError(f"Stored draft {paper_name!r} is invalid: {e}") from e
        return snapshot

    def resume(
        self,
        paper_name: str,
        bank: Sequence[Question],
        config: Optional[AssemblerConfig] = None,
    ) -> Optional[PaperAssembler]:
        """Rebuild a PaperAssembler from a stored draft, or None if absent."""
        snapshot = self.load(paper_name)
        if snapshot is None:
            return None
        return PaperAssembler.from_snapshot(snapshot, bank, config)

    def delete(self, paper_name: str) -> bool:
        """
        Remove a draft.

        Returns:
            True if a draft was removed
        """
        key = _draft_key(paper_name)
        if key not in self._drafts():
            return False

        def drop(existing: dict[str, Any]) -> dict[str, Any]:
            existing.get("drafts", {}).pop(key, None)
            return existing

        locked_read_modify_write_json(self.path, drop, default=_empty_cache)
        return True

    def names(self) -> list[str]:
        """Paper names with a stored draft, sorted."""
        return sorted(self._drafts())

    def _drafts(self) -> dict[str, Any]:
        try:
            data = read_json_locked(self.path, default=_empty_cache)
        except (OSError, json.JSONDecodeError) as e:
            raise DraftCacheError(f"Draft cache {self.path} is unreadable: {e}") from e
        drafts = data.get("drafts", {}) if isinstance(data, dict) else None
        if not isinstance(drafts, dict):
            raise DraftCacheError(f"Draft cache {self.path} has no drafts table")
        return drafts
