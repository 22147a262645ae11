"""Analysis endpoint: summarize or rate a video from its scraped data."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from video_digest.analysis.models import result_to_dict
from video_digest.analysis.pipeline import AnalysisPipeline
from video_digest.analysis.session import TRANSCRIPT_UNAVAILABLE
from video_digest.api.models import AnalyzeRequest, AnalyzeResponse, ChapterIn, TranscriptRowIn
from video_digest.config import settings
from video_digest.errors import AnalysisError, HttpError, ValidationError
from video_digest.generation.client import GenerationClient
from video_digest.ingestion.models import ChapterMark, TranscriptSegment, VideoMetadata
from video_digest.ingestion.parsers import parse_chapter_label, parse_transcript_row
from video_digest.ingestion.timecodes import parse_clock_or_default

router = APIRouter()


def build_pipeline() -> AnalysisPipeline:
    """Create a pipeline bound to the configured generation service."""
    client = GenerationClient(settings.ollama_base_url, timeout=settings.request_timeout)
    return AnalysisPipeline(client, settings)


def _to_chapter_mark(chapter: ChapterIn) -> ChapterMark | None:
    if chapter.label is not None:
        return parse_chapter_label(chapter.label)
    if not chapter.title:
        return None
    timestamp = chapter.timestamp_seconds
    if timestamp is None:
        timestamp = parse_clock_or_default(chapter.raw_time)
    return ChapterMark(title=chapter.title.strip(), timestamp_seconds=timestamp, raw_time=chapter.raw_time)


def _to_segment(row: TranscriptRowIn) -> TranscriptSegment:
    if isinstance(row.timestamp, (int, float)):
        return TranscriptSegment(text=row.text.strip(), timestamp_seconds=float(row.timestamp))
    return parse_transcript_row(row.timestamp, row.text)


def _error_detail(exc: AnalysisError) -> dict[str, Any]:
    detail: dict[str, Any] = {"message": str(exc)}
    if isinstance(exc, ValidationError):
        detail["missing_fields"] = exc.missing_fields
    if isinstance(exc, HttpError):
        detail["status"] = exc.status
    return detail


@router.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze(body: AnalyzeRequest) -> dict[str, Any]:
    """Run one analysis mode over the supplied transcript.

    Chapters without a parsable timestamp label are ignored.  Generation,
    upstream HTTP, and validation failures are returned as 502 with a
    structured detail.
    """
    if body.transcript is None:
        raise HTTPException(status_code=422, detail=TRANSCRIPT_UNAVAILABLE)

    transcript = [_to_segment(row) for row in body.transcript]
    marks = [m for m in (_to_chapter_mark(c) for c in body.chapters) if m is not None]
    metadata = VideoMetadata(title=body.video.title, description=body.video.description)

    pipeline = build_pipeline()
    try:
        result = await pipeline.run(body.mode, metadata, transcript, marks)
    except AnalysisError as exc:
        # Upstream LLM failure: 502 with structured detail for the caller to display.
        raise HTTPException(status_code=502, detail=_error_detail(exc)) from exc

    return result_to_dict(result)
