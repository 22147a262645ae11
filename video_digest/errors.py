"""Error taxonomy for transcript analysis.

Errors carry structured fields (``status``, ``missing_fields``, ``message``) so
callers and tests can inspect them without parsing log lines.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


class AnalysisError(Exception):
    """Base class for every failure surfaced by the analysis core."""


class FormatError(AnalysisError, ValueError):
    """Malformed clock timestamp text such as ``"1:xx"``."""


class GenerationError(AnalysisError):
    """In-band error reported by the generation service, or an unreachable service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class HttpError(AnalysisError):
    """The generation endpoint answered with a non-success status."""

    def __init__(self, status: int, detail: str = "") -> None:
        super().__init__(f"Generation request failed: {detail or status}")
        self.status = status
        self.detail = detail


class ValidationError(AnalysisError):
    """Structured output is missing required fields (fail closed)."""

    def __init__(self, missing_fields: Sequence[str], reason: str = "missing required fields") -> None:
        self.missing_fields = list(missing_fields)
        self.reason = reason
        super().__init__(
            f"Failed to get valid structured data from model: {reason}: "
            + ", ".join(self.missing_fields)
        )


class ChapterError(AnalysisError):
    """A failure while summarizing a single chapter.

    Raised nowhere; built by the orchestrator, logged, and kept on the
    result so the dropped chapter stays observable.
    """

    def __init__(self, chapter_title: str, raw_time: str, cause: AnalysisError) -> None:
        super().__init__(f'Failed to summarize chapter "{chapter_title}": {cause}')
        self.chapter_title = chapter_title
        self.raw_time = raw_time
        self.cause = cause


@dataclass(frozen=True)
class DecodeWarning:
    """One stream line that could not be decoded and was skipped."""

    line_number: int
    line: str
    reason: str
