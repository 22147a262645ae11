"""Parsers for scraped chapter labels and transcript rows."""

from __future__ import annotations

import re

from video_digest.ingestion.models import ChapterMark, TranscriptSegment
from video_digest.ingestion.timecodes import parse_clock_or_default

# "1:02 Intro", "1:02:03 Deep dive" -> leading clock, then the title
_CHAPTER_LABEL_RE = re.compile(r"^(?:\d+:)*\d+\s+(.+)", re.DOTALL)

DEFAULT_TIMESTAMP = "0:00"


def parse_chapter_label(label: str) -> ChapterMark | None:
    """Parse a player chapter label such as ``"1:02 Intro"``.

    Returns ``None`` when the label does not start with a clock timestamp.
    """
    label = label.strip()
    match = _CHAPTER_LABEL_RE.match(label)
    if not match:
        return None
    raw_time = label.split()[0]
    return ChapterMark(
        title=match.group(1).strip(),
        timestamp_seconds=parse_clock_or_default(raw_time),
        raw_time=raw_time,
    )


def parse_transcript_row(timestamp_text: str | None, text: str | None) -> TranscriptSegment:
    """Build a segment from the raw timestamp and text of one transcript row.

    Missing or malformed timestamps fall back to ``0:00``; missing text
    becomes an empty string.
    """
    timestamp = (timestamp_text or "").strip() or DEFAULT_TIMESTAMP
    return TranscriptSegment(
        text=(text or "").strip(),
        timestamp_seconds=parse_clock_or_default(timestamp),
    )
