"""Tests for Settings, AnalysisMode, and PipelineConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from video_digest.config import Settings
from video_digest.pipeline_config import AnalysisMode, PipelineConfig

# ---------------------------------------------------------------------------
# Enum tests
# ---------------------------------------------------------------------------


class TestAnalysisMode:
    def test_values(self) -> None:
        assert AnalysisMode.CHAPTER_SUMMARIES.value == "chapter_summaries"
        assert AnalysisMode.FULL_SUMMARY.value == "full_summary"
        assert AnalysisMode.CONTENT_QUALITY.value == "content_quality"

    def test_from_string(self) -> None:
        assert AnalysisMode("full_summary") is AnalysisMode.FULL_SUMMARY

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            AnalysisMode("invalid")

    def test_is_str_subclass(self) -> None:
        """Enum values behave as plain strings for JSON serialization."""
        assert isinstance(AnalysisMode.CONTENT_QUALITY, str)


# ---------------------------------------------------------------------------
# PipelineConfig tests
# ---------------------------------------------------------------------------


class TestPipelineConfig:
    def test_defaults_to_sequential(self) -> None:
        assert PipelineConfig().chapter_concurrency == 1

    def test_custom_value(self) -> None:
        assert PipelineConfig(chapter_concurrency=4).chapter_concurrency == 4

    def test_rejects_zero(self) -> None:
        with pytest.raises(ValueError):
            PipelineConfig(chapter_concurrency=0)

    def test_immutable(self) -> None:
        cfg = PipelineConfig()
        with pytest.raises(AttributeError):
            cfg.chapter_concurrency = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Settings tests
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, test_settings: Settings) -> None:
        assert test_settings.ollama_base_url == "http://localhost:11434"
        assert test_settings.summary_model == "phi4"
        assert test_settings.structuring_model == "llama3.3"
        assert test_settings.request_timeout is None
        assert test_settings.chapter_concurrency == 1
        assert test_settings.structuring_temperature == 0.1

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
        monkeypatch.setenv("REQUEST_TIMEOUT", "90")
        monkeypatch.setenv("CHAPTER_CONCURRENCY", "2")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.ollama_base_url == "http://gpu-box:11434"
        assert settings.request_timeout == 90.0
        assert settings.chapter_concurrency == 2

    @pytest.mark.parametrize("value", [0, -1])
    def test_rejects_non_positive_concurrency(self, value: int) -> None:
        with pytest.raises(PydanticValidationError, match="chapter_concurrency"):
            Settings(_env_file=None, chapter_concurrency=value)  # type: ignore[call-arg]
