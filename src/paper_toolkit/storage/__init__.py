"""
Module: storage

Purpose:
    File-backed collaborators of the assembler: the local draft cache and
    a local submission target. All writes are locked read-modify-writes.
"""

from .draft_cache import DraftCache, DraftCacheError
from .paper_store import LocalPaperStore

__all__ = [
    "DraftCache",
    "DraftCacheError",
    "LocalPaperStore",
]
