"""
Module: assembler.config

Purpose:
    Configuration dataclass for the paper assembler. Immutable
    configuration with validation on construction, plus a JSON loader
    that falls back to defaults instead of failing on a bad file.

Key Classes:
    - AssemblerConfig: Section defaults and sampling seed

Key Functions:
    - load_config(): Read an AssemblerConfig from a JSON file

Dependencies:
    - dataclasses (std)
    - json (std)

Used By:
    - assembler.sections: create_section defaults
    - assembler.paper_assembler: PaperAssembler
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from paper_toolkit.core.models import Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssemblerConfig:
    """
    Configuration for assembling papers (immutable).

    Attributes:
        default_difficulty: Difficulty of a newly added section
        default_requested_count: Question count of a newly added section
        default_mark_per_question: Fallback mark of a newly added section
        section_name_template: Positional name; `{index}` is 1-based
        seed: Random seed for reproducible sampling (None = unseeded)

    Example:
        >>> config = AssemblerConfig(seed=7)
        >>> config.section_name(2)
        'Section 2'
    """

    default_difficulty: Difficulty = Difficulty.MEDIUM
    default_requested_count: int = 5
    default_mark_per_question: int = 4
    section_name_template: str = "Section {index}"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.default_difficulty, Difficulty):
            raise ValueError(f"Invalid default_difficulty: {self.default_difficulty!r}")
        if self.default_requested_count < 0:
            raise ValueError(
                f"default_requested_count must be non-negative: {self.default_requested_count}"
            )
        if self.default_mark_per_question <= 0:
            raise ValueError(
                f"default_mark_per_question must be positive: {self.default_mark_per_question}"
            )
        if "{index}" not in self.section_name_template:
            raise ValueError(
                f"section_name_template must contain '{{index}}': {self.section_name_template!r}"
            )

    def section_name(self, index: int) -> str:
        """Positional section name for a 1-based index."""
        return self.section_name_template.format(index=index)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["default_difficulty"] = self.default_difficulty.value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssemblerConfig:
        """
        Build a config from a dictionary; unknown keys are ignored.

        Raises:
            ValueError: If a known key holds an invalid value
        """
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "default_difficulty" in known:
            known["default_difficulty"] = Difficulty.parse(known["default_difficulty"])
        return cls(**known)


def load_config(path: Path) -> AssemblerConfig:
    """
    Load assembler configuration from a JSON file.

    A missing file yields the defaults. A malformed file is logged and
    also yields the defaults, so a bad settings file never stops a session.

    Args:
        path: Path to config JSON

    Returns:
        AssemblerConfig
    """
    if not path.exists():
        return AssemblerConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("config root must be an object")
        return AssemblerConfig.from_dict(data)
    except (json.JSONDecodeError, ValueError, TypeError) as e:
        logger.warning(f"Ignoring invalid assembler config {path}: {e}. Using defaults.")
        return AssemblerConfig()
