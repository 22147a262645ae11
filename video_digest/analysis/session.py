"""Wire the pipeline to the collaborators that supply video data and show results."""

from __future__ import annotations

import logging
from typing import Protocol

from video_digest.analysis.models import AnalysisResult
from video_digest.analysis.pipeline import AnalysisPipeline
from video_digest.errors import AnalysisError
from video_digest.ingestion.models import ChapterMark, TranscriptSegment, VideoMetadata
from video_digest.pipeline_config import AnalysisMode

logger = logging.getLogger(__name__)

TRANSCRIPT_UNAVAILABLE = "Transcript not available for this video"


class VideoSource(Protocol):
    """Supplies the scraped data for the current video."""

    def get_video_metadata(self) -> VideoMetadata: ...

    def get_chapter_marks(self) -> list[ChapterMark]: ...

    def get_transcript(self) -> list[TranscriptSegment] | None: ...


class ResultSink(Protocol):
    """Receives exactly one of a result or an error message per run."""

    def on_result(self, result: AnalysisResult) -> None: ...

    def on_error(self, message: str) -> None: ...


async def analyze_video(
    pipeline: AnalysisPipeline,
    source: VideoSource,
    sink: ResultSink,
    mode: AnalysisMode | str = AnalysisMode.CONTENT_QUALITY,
) -> AnalysisResult | None:
    """Run one analysis of the video described by *source*.

    Returns:
        The result delivered to ``sink.on_result``, or ``None`` when
        ``sink.on_error`` was called instead.
    """
    transcript = source.get_transcript()
    if transcript is None:
        sink.on_error(TRANSCRIPT_UNAVAILABLE)
        return None

    metadata = source.get_video_metadata()
    marks = source.get_chapter_marks()
    try:
        result = await pipeline.run(mode, metadata, transcript, marks)
    except AnalysisError as exc:
        logger.exception("Analysis failed for %r", metadata.title)
        sink.on_error(str(exc))
        return None

    sink.on_result(result)
    return result
