"""
Module: assembler.fields

Purpose:
    Parsing policy for values typed into form-like editors. Numeric input
    never raises: anything that does not start with an integer becomes 0,
    and negative numbers clamp to 0. Topic selections accept the
    "all topics" sentinel.

Key Functions:
    - parse_lenient_int(): Lenient integer parse
    - parse_topic_filter(): Normalize a topic selection to a frozenset

Used By:
    - assembler.sections.update_section_field
    - assembler.paper_assembler.PaperAssembler.update_metadata
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable

# Dropdown value meaning "no topic chosen" (select from all topics)
ALL_TOPICS = ""

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_lenient_int(value: Any) -> int:
    """
    Parse a form value as a non-negative integer.

    Leading integer text is used ("12 marks" -> 12, "3.7" -> 3), floats
    are truncated, and everything else (None, "", "abc", NaN) is 0.
    Negative results clamp to 0.

    Example:
        >>> parse_lenient_int("7")
        7
        >>> parse_lenient_int("seven")
        0
    """
    if isinstance(value, bool):
        result = 0
    elif isinstance(value, int):
        result = value
    elif isinstance(value, float):
        result = int(value) if math.isfinite(value) else 0
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        result = int(match.group(1)) if match else 0
    else:
        result = 0
    return max(result, 0)


def parse_topic_filter(value: Any) -> frozenset[str]:
    """
    Normalize a topic selection.

    `ALL_TOPICS` ("") and None mean "all topics" and give the empty set,
    never a set containing an empty string. A single string is one topic;
    any other iterable is a multi-select whose blank entries are dropped.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        topic = value.strip()
        return frozenset({topic}) if topic else frozenset()
    if isinstance(value, Iterable):
        return frozenset(
            str(t).strip() for t in value if t is not None and str(t).strip()
        )
    raise TypeError(f"Unsupported topic selection: {value!r}")
