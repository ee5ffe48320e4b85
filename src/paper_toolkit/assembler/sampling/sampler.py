"""
Module: assembler.sampling.sampler

Purpose:
    Pure question sampler. Filters the bank by difficulty and topic and
    draws the requested number of questions uniformly at random, without
    replacement.

Key Functions:
    - sample_questions(): Main entry point for sampling
    - resolve_topics(): Expand an empty topic filter to every bank topic

Key Classes:
    - SampleResult: Selected questions plus fulfilment information
    - Shortfall: Structured warning for a best-effort partial result

Algorithm:
    1. Resolve topics (empty filter = all distinct bank topics)
    2. Keep questions with matching difficulty and a resolved topic
    3. Too few matches: return them all, fulfilled=False, with a Shortfall
    4. Otherwise: partial Fisher-Yates shuffle of a copy, take the first k

Dependencies:
    - random (std): injectable random source
    - paper_toolkit.core.models: Question, Difficulty

Used By:
    - assembler.sections.generate_section
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from paper_toolkit.assembler.fields import parse_topic_filter
from paper_toolkit.core.models import Difficulty, Question

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shortfall:
    """
    Best-effort warning: the bank held fewer matches than requested.

    Attributes:
        difficulty: Requested difficulty
        topics: Resolved topics that were searched
        requested: Number of questions asked for
        found: Number of matching questions returned
    """

    difficulty: Difficulty
    topics: frozenset[str]
    requested: int
    found: int

    @property
    def missing(self) -> int:
        return self.requested - self.found

    @property
    def message(self) -> str:
        topics = ", ".join(sorted(self.topics)) or "(none)"
        return (
            f"Insufficient questions found for Difficulty: {self.difficulty.value}, "
            f"Topics: {topics}. Found {self.found}, needed {self.requested}. "
            f"Returning all available."
        )


@dataclass(frozen=True)
class SampleResult:
    """
    Result of one sampling call.

    Attributes:
        selected: Selected questions (no duplicates)
        fulfilled: True when exactly `requested` questions were drawn
        requested: Requested count
        available: Number of bank questions matching the filters
        topics: Resolved topic set used for filtering
        shortfall: Set when fulfilled is False
    """

    selected: tuple[Question, ...]
    fulfilled: bool
    requested: int
    available: int
    topics: frozenset[str]
    shortfall: Optional[Shortfall] = None

    @property
    def count(self) -> int:
        return len(self.selected)


def resolve_topics(bank: Iterable[Question], topic_filter: Iterable[str]) -> frozenset[str]:
    """
    Resolve the topic set to filter by.

    Args:
        bank: Question bank
        topic_filter: Requested topics (a single topic string is allowed);
            empty means all topics

    Returns:
        topic_filter verbatim, or every distinct group in the bank if empty
    """
    topics = parse_topic_filter(topic_filter)
    if topics:
        return topics
    return frozenset(q.group for q in bank)


def filter_questions(
    bank: Iterable[Question],
    difficulty: Difficulty,
    topics: frozenset[str],
) -> list[Question]:
    """Questions with exactly this difficulty and a group in topics, in bank order."""
    return [q for q in bank if q.difficulty == difficulty and q.group in topics]


def partial_shuffle(pool: list, k: int, rng: random.Random) -> list:
    """
    Draw k items uniformly without replacement (partial Fisher-Yates).

    Shuffles only the first k positions of `pool` in place; every
    size-k subset is equally likely.

    Args:
        pool: Items to draw from; reordered in place
        k: Number of items to draw, 0 <= k <= len(pool)
        rng: Random source

    Returns:
        The first k items after shuffling
    """
    n = len(pool)
    for i in range(k):
        j = rng.randrange(i, n)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:k]


def sample_questions(
    bank: Sequence[Question],
    difficulty: Difficulty,
    requested_count: int,
    topic_filter: Iterable[str] = (),
    *,
    rng: Optional[random.Random] = None,
) -> SampleResult:
    """
    Select questions for one section.

    Args:
        bank: Full question bank (not modified)
        difficulty: Exact difficulty to match
        requested_count: Number of questions wanted (0 gives an empty result)
        topic_filter: Topics to draw from; empty means all topics
        rng: Random source; a fresh unseeded Random when omitted

    Returns:
        SampleResult. When the bank has fewer matches than requested all
        matches are returned with fulfilled=False and a Shortfall.

    Raises:
        ValueError: If requested_count is negative

    Example:
        >>> result = sample_questions(bank, Difficulty.MEDIUM, 5, rng=random.Random(1))
        >>> result.fulfilled, result.count
        (True, 5)
    """
    if requested_count < 0:
        raise ValueError(f"requested_count must be non-negative: {requested_count}")

    difficulty = Difficulty.parse(difficulty)
    topics = resolve_topics(bank, topic_filter)
    candidates = filter_questions(bank, difficulty, topics)
    available = len(candidates)

    if requested_count == 0:
        return SampleResult(
            selected=(),
            fulfilled=True,
            requested=0,
            available=available,
            topics=topics,
        )

    if available < requested_count:
        shortfall = Shortfall(
            difficulty=difficulty,
            topics=topics,
            requested=requested_count,
            found=available,
        )
        logger.warning(shortfall.message)
        return SampleResult(
            selected=tuple(candidates),
            fulfilled=False,
            requested=requested_count,
            available=available,
            topics=topics,
            shortfall=shortfall,
        )

    rng = rng or random.Random()
    selected = partial_shuffle(candidates, requested_count, rng)
    logger.debug(
        f"Sampled {requested_count} of {available} {difficulty.value} questions "
        f"from {len(topics)} topics"
    )
    return SampleResult(
        selected=tuple(selected),
        fulfilled=True,
        requested=requested_count,
        available=available,
        topics=topics,
    )
