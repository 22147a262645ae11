"""Data models for structured content-quality extraction."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

REQUIRED_FIELDS: tuple[str, ...] = (
    "clickbaitScore",
    "contentValue",
    "fluffPercentage",
    "keyIssues",
    "skipSections",
    "verdict",
)


@dataclass(frozen=True)
class StructuredQuality:
    """Validated Stage B output.

    Field names match the JSON keys the model is asked for.  Values are kept
    exactly as produced: only presence is checked, not type or range.
    """

    clickbaitScore: Any  # 0-100 requested
    contentValue: Any  # "low" | "medium" | "high" requested
    fluffPercentage: Any  # 0-100 requested
    keyIssues: Any  # list[str] requested
    skipSections: Any  # list[{"time": "MM:SS", "reason": str}] requested
    verdict: Any

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StructuredQuality:
        """Build from a mapping that already holds every required field."""
        return cls(**{name: data[name] for name in REQUIRED_FIELDS})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
