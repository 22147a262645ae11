"""Two-stage content-quality extraction: free-text analysis, then JSON structuring."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from video_digest.config import Settings, get_settings
from video_digest.errors import ValidationError
from video_digest.extraction.models import REQUIRED_FIELDS, StructuredQuality
from video_digest.generation.client import GenerationRequest, SamplingOptions, TextGenerator
from video_digest.generation.prompts import build_analysis_prompt, build_structuring_prompt
from video_digest.ingestion.models import TranscriptSegment, VideoMetadata
from video_digest.ingestion.segmentation import join_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Extraction:
    """Stage A text plus the validated Stage B object."""

    analysis_text: str
    structured: StructuredQuality


def validate_structured(text: str) -> StructuredQuality:
    """Parse Stage B output and check that every required field is present.

    Fails closed: nothing is defaulted and no partial object is returned.

    Raises:
        ValidationError: If *text* is not a JSON object (all fields reported
            missing) or any required field is absent.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = None
    if not isinstance(data, dict):
        raise ValidationError(REQUIRED_FIELDS, reason="not a JSON object")

    missing = [name for name in REQUIRED_FIELDS if name not in data]
    if missing:
        raise ValidationError(missing)
    return StructuredQuality.from_mapping(data)


class StructuredExtractor:
    """Run the analysis → structuring protocol against a text generator.

    Stage A sees the title, description and full transcript; Stage B sees
    only Stage A's text, never the transcript.
    """

    def __init__(self, client: TextGenerator, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or get_settings()

    def analysis_request(self, metadata: VideoMetadata, transcript: Sequence[TranscriptSegment]) -> GenerationRequest:
        return GenerationRequest(
            model=self.settings.analysis_model,
            prompt=build_analysis_prompt(metadata.title, metadata.description, join_text(transcript)),
            sampling=SamplingOptions(
                temperature=self.settings.analysis_temperature,
                max_tokens=self.settings.analysis_max_tokens,
            ),
        )

    def structuring_request(self, analysis_text: str) -> GenerationRequest:
        return GenerationRequest(
            model=self.settings.structuring_model,
            prompt=build_structuring_prompt(analysis_text),
            sampling=SamplingOptions(
                temperature=self.settings.structuring_temperature,
                max_tokens=self.settings.structuring_max_tokens,
            ),
            structured_output=True,
        )

    async def extract(self, metadata: VideoMetadata, transcript: Sequence[TranscriptSegment]) -> Extraction:
        """Run both stages and validate the result.

        Raises:
            GenerationError, HttpError: From either generation call.
            ValidationError: If Stage B output lacks required fields.
        """
        analysis_text = await self.client.generate(self.analysis_request(metadata, transcript))
        logger.info("Stage A analysis produced %d chars", len(analysis_text))

        structured_text = await self.client.generate(self.structuring_request(analysis_text))
        try:
            structured = validate_structured(structured_text)
        except ValidationError as exc:
            logger.warning("Rejected structured output (%s): %s", exc.reason, ", ".join(exc.missing_fields))
            raise

        return Extraction(analysis_text=analysis_text, structured=structured)
