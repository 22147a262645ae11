"""Analysis orchestrator: chapter summaries, full summary, content quality."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from video_digest.analysis.models import (
    AnalysisResult,
    ChapterSummaries,
    ChapterSummary,
    ContentQuality,
    FullSummary,
)
from video_digest.config import Settings, get_settings
from video_digest.errors import AnalysisError, ChapterError
from video_digest.extraction.extractor import StructuredExtractor
from video_digest.generation.client import GenerationRequest, SamplingOptions, TextGenerator
from video_digest.generation.prompts import build_chapter_prompt, build_full_summary_prompt
from video_digest.ingestion.models import ChapterMark, ChapterWindow, TranscriptSegment, VideoMetadata
from video_digest.ingestion.segmentation import bucket_transcript, compute_windows, join_text
from video_digest.pipeline_config import AnalysisMode, PipelineConfig

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Compose segmentation, generation and extraction into three operations.

    Each operation is single-shot with no retry.  Only chapter summarization
    isolates failures (per chapter); the other two propagate them.

    Args:
        client: The text generator, e.g. a :class:`GenerationClient` or a fake.
        settings: Models and sampling options; defaults to :func:`get_settings`.
        config: Orchestration options; defaults to ``settings.chapter_concurrency``.
    """

    def __init__(
        self,
        client: TextGenerator,
        settings: Settings | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.client = client
        self.settings = settings or get_settings()
        self.config = config or PipelineConfig(chapter_concurrency=self.settings.chapter_concurrency)
        self.extractor = StructuredExtractor(client, self.settings)

    def _summary_request(self, prompt: str) -> GenerationRequest:
        return GenerationRequest(
            model=self.settings.summary_model,
            prompt=prompt,
            sampling=SamplingOptions(
                temperature=self.settings.summary_temperature,
                max_tokens=self.settings.summary_max_tokens,
            ),
        )

    async def summarize_by_chapter(
        self,
        transcript: Sequence[TranscriptSegment],
        marks: Sequence[ChapterMark],
    ) -> ChapterSummaries:
        """Summarize each chapter window independently.

        A failing chapter is logged and dropped; the rest still complete.
        Results keep chapter order regardless of ``chapter_concurrency``.

        Args:
            transcript: Transcript segments in time order.
            marks: Chapter marks sorted by start time.
        """
        windows = compute_windows(marks)
        semaphore = asyncio.Semaphore(self.config.chapter_concurrency)

        async def run(window: ChapterWindow) -> ChapterSummary | ChapterError:
            async with semaphore:
                return await self._summarize_chapter(transcript, window)

        outcomes = await asyncio.gather(*(run(window) for window in windows))

        items = [o for o in outcomes if isinstance(o, ChapterSummary)]
        failures = [o for o in outcomes if isinstance(o, ChapterError)]
        logger.info("Summarized %d/%d chapters", len(items), len(windows))
        return ChapterSummaries(items=items, failures=failures)

    async def _summarize_chapter(
        self, transcript: Sequence[TranscriptSegment], window: ChapterWindow
    ) -> ChapterSummary | ChapterError:
        text = join_text(bucket_transcript(transcript, window))
        try:
            summary = await self.client.generate(
                self._summary_request(build_chapter_prompt(window.title, text))
            )
        except AnalysisError as exc:
            error = ChapterError(window.title, window.raw_time, exc)
            logger.exception("Failed to summarize chapter %r", window.title)
            return error
        return ChapterSummary(chapter_title=window.title, raw_time=window.raw_time, summary_text=summary)

    async def summarize_full(self, transcript: Sequence[TranscriptSegment]) -> FullSummary:
        """Summarize the whole transcript in one call; errors propagate."""
        summary = await self.client.generate(
            self._summary_request(build_full_summary_prompt(join_text(transcript)))
        )
        return FullSummary(summary_text=summary)

    async def analyze_content_quality(
        self,
        metadata: VideoMetadata,
        transcript: Sequence[TranscriptSegment],
    ) -> ContentQuality:
        """Rate clickbait and filler content; any stage or validation failure propagates."""
        extraction = await self.extractor.extract(metadata, transcript)
        return ContentQuality(raw_analysis_text=extraction.analysis_text, structured=extraction.structured)

    async def run(
        self,
        mode: AnalysisMode | str,
        metadata: VideoMetadata,
        transcript: Sequence[TranscriptSegment],
        marks: Sequence[ChapterMark] = (),
    ) -> AnalysisResult:
        """Dispatch to the operation for *mode*."""
        # Normalise to enum
        if isinstance(mode, str):
            mode = AnalysisMode(mode)

        if mode is AnalysisMode.CHAPTER_SUMMARIES:
            return await self.summarize_by_chapter(transcript, marks)
        if mode is AnalysisMode.FULL_SUMMARY:
            return await self.summarize_full(transcript)
        return await self.analyze_content_quality(metadata, transcript)
