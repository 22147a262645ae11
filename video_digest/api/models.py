"""Pydantic request/response schemas for the video-digest API."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from video_digest.pipeline_config import AnalysisMode


class VideoIn(BaseModel):
    """Video metadata scraped from the watch page."""

    title: str = ""
    description: str = ""


class ChapterIn(BaseModel):
    """A chapter mark, either parsed already or as a raw player label.

    When ``label`` (e.g. ``"1:02 Intro"``) is set it takes precedence over
    the other fields.
    """

    title: str | None = None
    raw_time: str = ""
    timestamp_seconds: float | None = None
    label: str | None = None


class TranscriptRowIn(BaseModel):
    """One transcript row; ``timestamp`` is seconds or clock text like ``"1:02"``."""

    text: str = ""
    timestamp: float | str | None = None


class AnalyzeRequest(BaseModel):
    """Request body for the /api/analyze endpoint.

    ``transcript`` is ``null`` when the page had no transcript.
    """

    mode: AnalysisMode = AnalysisMode.CONTENT_QUALITY
    video: VideoIn = Field(default_factory=VideoIn)
    chapters: list[ChapterIn] = []
    transcript: list[TranscriptRowIn] | None = None


class ChapterSummaryOut(BaseModel):
    chapter_title: str
    raw_time: str
    summary_text: str


class ChapterSummariesResponse(BaseModel):
    type: Literal["chapter_summaries"] = "chapter_summaries"
    items: list[ChapterSummaryOut] = []
    failed_chapters: list[str] = []


class FullSummaryResponse(BaseModel):
    type: Literal["full_summary"] = "full_summary"
    summary_text: str


class StructuredQualityOut(BaseModel):
    """Structured quality fields, passed through exactly as the model produced them."""

    clickbaitScore: Any
    contentValue: Any
    fluffPercentage: Any
    keyIssues: Any
    skipSections: Any
    verdict: Any


class ContentQualityResponse(BaseModel):
    type: Literal["content_quality"] = "content_quality"
    raw_analysis_text: str
    structured: StructuredQualityOut


AnalyzeResponse = Annotated[
    ChapterSummariesResponse | FullSummaryResponse | ContentQualityResponse,
    Field(discriminator="type"),
]
