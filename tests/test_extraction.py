"""Tests for structured content-quality extraction (no generation service required)."""

from __future__ import annotations

import asyncio
import json

import pytest
from conftest import FakeGenerator

from video_digest.config import Settings
from video_digest.errors import GenerationError, ValidationError
from video_digest.extraction.extractor import StructuredExtractor, validate_structured
from video_digest.extraction.models import REQUIRED_FIELDS, StructuredQuality
from video_digest.ingestion.models import TranscriptSegment, VideoMetadata

VALID_OBJECT = {
    "clickbaitScore": 35,
    "contentValue": "medium",
    "fluffPercentage": 40,
    "keyIssues": ["Long sponsor segment"],
    "skipSections": [{"time": "02:10", "reason": "Sponsor read"}],
    "verdict": "Worth watching at 1.5x.",
}

METADATA = VideoMetadata(title="You won't BELIEVE this", description="A video about sourdough.")
TRANSCRIPT = [TranscriptSegment("Welcome back.", 0), TranscriptSegment("Today we bake bread.", 4)]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidateStructured:
    def test_valid_object(self) -> None:
        quality = validate_structured(json.dumps(VALID_OBJECT))
        assert quality.clickbaitScore == 35
        assert quality.contentValue == "medium"
        assert quality.skipSections == [{"time": "02:10", "reason": "Sponsor read"}]
        assert quality.to_dict() == VALID_OBJECT

    def test_missing_verdict(self) -> None:
        data = {k: v for k, v in VALID_OBJECT.items() if k != "verdict"}
        with pytest.raises(ValidationError) as exc_info:
            validate_structured(json.dumps(data))
        assert exc_info.value.missing_fields == ["verdict"]

    def test_missing_fields_in_schema_order(self) -> None:
        data = {"verdict": "meh", "contentValue": "low"}
        with pytest.raises(ValidationError) as exc_info:
            validate_structured(json.dumps(data))
        assert exc_info.value.missing_fields == [
            "clickbaitScore",
            "fluffPercentage",
            "keyIssues",
            "skipSections",
        ]

    @pytest.mark.parametrize("text", ["", "not json", "[1, 2, 3]", '"verdict"'])
    def test_non_object_fails_closed(self, text: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_structured(text)
        assert exc_info.value.missing_fields == list(REQUIRED_FIELDS)
        assert exc_info.value.reason == "not a JSON object"

    def test_out_of_range_values_are_accepted(self) -> None:
        """Only presence is checked; ranges and enums are not enforced."""
        data = dict(VALID_OBJECT, clickbaitScore=150, contentValue="excellent")
        quality = validate_structured(json.dumps(data))
        assert quality.clickbaitScore == 150
        assert quality.contentValue == "excellent"

    def test_extra_fields_are_dropped(self) -> None:
        data = dict(VALID_OBJECT, confidence=0.9)
        assert "confidence" not in validate_structured(json.dumps(data)).to_dict()

    def test_null_value_counts_as_present(self) -> None:
        data = dict(VALID_OBJECT, keyIssues=None)
        assert validate_structured(json.dumps(data)).keyIssues is None


# ---------------------------------------------------------------------------
# Two-stage extractor
# ---------------------------------------------------------------------------


class TestStructuredExtractor:
    def test_two_stage_protocol(self, test_settings: Settings) -> None:
        fake = FakeGenerator(["Title is mildly clickbait; 40% filler.", json.dumps(VALID_OBJECT)])

        extraction = asyncio.run(StructuredExtractor(fake, test_settings).extract(METADATA, TRANSCRIPT))

        assert extraction.analysis_text == "Title is mildly clickbait; 40% filler."
        assert extraction.structured == StructuredQuality.from_mapping(VALID_OBJECT)

        stage_a, stage_b = fake.requests
        assert stage_a.model == test_settings.analysis_model
        assert stage_a.sampling.temperature == 0.7
        assert stage_a.sampling.max_tokens == 512
        assert not stage_a.structured_output
        assert "You won't BELIEVE this" in stage_a.prompt
        assert "A video about sourdough." in stage_a.prompt
        assert "Welcome back. Today we bake bread." in stage_a.prompt
        assert "500 characters" in stage_a.prompt

        assert stage_b.model == test_settings.structuring_model
        assert stage_b.sampling.temperature == 0.1
        assert stage_b.structured_output
        assert "Title is mildly clickbait; 40% filler." in stage_b.prompt
        assert '"clickbaitScore"' in stage_b.prompt
        # The transcript is not re-sent to the structuring stage.
        assert "Today we bake bread." not in stage_b.prompt

    def test_validation_failure_returns_nothing(self, test_settings: Settings) -> None:
        incomplete = {k: v for k, v in VALID_OBJECT.items() if k != "verdict"}
        fake = FakeGenerator(["analysis", json.dumps(incomplete)])

        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(StructuredExtractor(fake, test_settings).extract(METADATA, TRANSCRIPT))
        assert exc_info.value.missing_fields == ["verdict"]

    def test_stage_a_failure_skips_stage_b(self, test_settings: Settings) -> None:
        fake = FakeGenerator([GenerationError("model not found")])

        with pytest.raises(GenerationError):
            asyncio.run(StructuredExtractor(fake, test_settings).extract(METADATA, TRANSCRIPT))
        assert len(fake.requests) == 1

    def test_stage_b_failure_propagates(self, test_settings: Settings) -> None:
        fake = FakeGenerator(["analysis", GenerationError("boom")])

        with pytest.raises(GenerationError, match="boom"):
            asyncio.run(StructuredExtractor(fake, test_settings).extract(METADATA, TRANSCRIPT))
