"""Tagged result types returned by the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from video_digest.errors import ChapterError
from video_digest.extraction.models import StructuredQuality
from video_digest.pipeline_config import AnalysisMode


@dataclass(frozen=True)
class ChapterSummary:
    """Summary of one chapter, labelled the way the player shows it."""

    chapter_title: str
    raw_time: str
    summary_text: str


@dataclass(frozen=True)
class ChapterSummaries:
    """Per-chapter summaries; chapters that failed are listed in ``failures`` only."""

    items: list[ChapterSummary] = field(default_factory=list)
    failures: list[ChapterError] = field(default_factory=list)
    type: AnalysisMode = field(default=AnalysisMode.CHAPTER_SUMMARIES, init=False)


@dataclass(frozen=True)
class FullSummary:
    summary_text: str
    type: AnalysisMode = field(default=AnalysisMode.FULL_SUMMARY, init=False)


@dataclass(frozen=True)
class ContentQuality:
    """Free-text analysis plus its validated structured form."""

    raw_analysis_text: str
    structured: StructuredQuality
    type: AnalysisMode = field(default=AnalysisMode.CONTENT_QUALITY, init=False)


AnalysisResult = ChapterSummaries | FullSummary | ContentQuality


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Serialize a result to plain JSON-ready data."""
    if isinstance(result, ChapterSummaries):
        return {
            "type": result.type.value,
            "items": [
                {
                    "chapter_title": item.chapter_title,
                    "raw_time": item.raw_time,
                    "summary_text": item.summary_text,
                }
                for item in result.items
            ],
            "failed_chapters": [failure.chapter_title for failure in result.failures],
        }
    if isinstance(result, FullSummary):
        return {"type": result.type.value, "summary_text": result.summary_text}
    return {
        "type": result.type.value,
        "raw_analysis_text": result.raw_analysis_text,
        "structured": result.structured.to_dict(),
    }
