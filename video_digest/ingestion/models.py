"""Data models for transcript and chapter input."""

from __future__ import annotations

import math
from dataclasses import dataclass

# End of the last chapter window: absorbs all trailing transcript.
UNBOUNDED = math.inf


@dataclass(frozen=True)
class TranscriptSegment:
    """One caption line and the second it starts at."""

    text: str
    timestamp_seconds: float = 0.0


@dataclass(frozen=True)
class ChapterMark:
    """A chapter title, its start in seconds, and the clock text it was read from."""

    title: str
    timestamp_seconds: float
    raw_time: str = ""


@dataclass(frozen=True)
class ChapterWindow:
    """A chapter mark extended with the end of its ``[start, end)`` window."""

    title: str
    timestamp_seconds: float
    raw_time: str
    end_timestamp_seconds: float = UNBOUNDED

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.end_timestamp_seconds)

    def contains(self, timestamp_seconds: float) -> bool:
        return self.timestamp_seconds <= timestamp_seconds < self.end_timestamp_seconds


@dataclass(frozen=True)
class VideoMetadata:
    """Title and description shown alongside the video."""

    title: str = ""
    description: str = ""
