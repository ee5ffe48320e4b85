"""
Module: storage.file_locking

Purpose:
    Locked access to the single-document JSON stores (draft cache, local
    paper store). Several editor sessions may share one store file, so
    readers take a shared portalocker lock and writers an exclusive one.

Key Functions:
    - locked_file: Open a store file with a lock held
    - read_json_locked: Parse a store document under a shared lock
    - locked_read_modify_write_json: Update a store document in one locked step

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - storage.draft_cache: DraftCache
    - storage.paper_store: LocalPaperStore
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Generator, TextIO

import portalocker

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator[TextIO, None, None]:
    """
    Open a store file with a portalocker lock held for the block.

    A missing file is created empty for read and update modes, so a
    first session can lock a store nobody has written yet.

    Args:
        path: Store file.
        mode: Open mode ('r', 'r+', 'w').
        lock_type: LOCK_SH for readers, LOCK_EX for writers.

    Yields:
        Open text handle.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if 'r' in mode and not path.exists():
        path.touch()

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def _parse(content: str, default: Callable[[], Document]) -> Document:
    return json.loads(content) if content.strip() else default()


def read_json_locked(
    path: Path,
    default: Callable[[], Document] = dict,
) -> Document:
    """
    Read a store document under a shared lock.

    Args:
        path: Store file.
        default: Factory used when the file is missing or empty.

    Raises:
        json.JSONDecodeError: If the file holds invalid JSON.
    """
    if not path.exists():
        return default()

    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        return _parse(f.read(), default)


def locked_read_modify_write_json(
    path: Path,
    modifier: Callable[[Document], Document],
    default: Callable[[], Document] = dict,
) -> Document:
    """
    Apply `modifier` to a store document and write the result back, all
    under one exclusive lock so concurrent upserts are not lost.

    Args:
        path: Store file.
        modifier: Takes the current document, returns the new one.
        default: Starting document when the file is missing or empty.

    Returns:
        The document that was written.

    Raises:
        json.JSONDecodeError: If the file holds invalid JSON (nothing is written).

    Example:
        >>> def drop(store):
        ...     store['drafts'].pop('AI-101', None)
        ...     return store
        >>> locked_read_modify_write_json(cache_path, drop, default=_empty_cache)
    """
    with locked_file(path, 'r+', portalocker.LOCK_EX) as f:
        modified = modifier(_parse(f.read(), default))
        f.seek(0)
        f.truncate()
        json.dump(modified, f, indent=2, ensure_ascii=False)

    logger.debug(f"Updated store {path.name}")
    return modified
