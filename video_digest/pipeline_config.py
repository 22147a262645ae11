"""Pipeline configuration: analysis mode enum and PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AnalysisMode(StrEnum):
    """Available analysis modes; values double as result type tags."""

    CHAPTER_SUMMARIES = "chapter_summaries"
    FULL_SUMMARY = "full_summary"
    CONTENT_QUALITY = "content_quality"


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for the analysis pipeline.

    ``chapter_concurrency`` bounds in-flight generation requests during
    chapter summarization.  The default of 1 issues them one at a time.
    """

    chapter_concurrency: int = 1

    def __post_init__(self) -> None:
        if self.chapter_concurrency < 1:
            raise ValueError("chapter_concurrency must be at least 1")
