"""Chapter windowing: split a flat transcript into per-chapter buckets."""

from __future__ import annotations

from collections.abc import Sequence

from video_digest.ingestion.models import UNBOUNDED, ChapterMark, ChapterWindow, TranscriptSegment


def compute_windows(marks: Sequence[ChapterMark]) -> list[ChapterWindow]:
    """Compute the ``[start, end)`` window of every chapter.

    Each window ends where the next mark starts; the last one is unbounded.
    Marks must already be sorted by ``timestamp_seconds``; they are not
    re-sorted here.

    Args:
        marks: Chapter marks in ascending time order.

    Returns:
        One :class:`ChapterWindow` per mark, in the same order.
    """
    windows: list[ChapterWindow] = []
    for i, mark in enumerate(marks):
        end = marks[i + 1].timestamp_seconds if i + 1 < len(marks) else UNBOUNDED
        windows.append(
            ChapterWindow(
                title=mark.title,
                timestamp_seconds=mark.timestamp_seconds,
                raw_time=mark.raw_time,
                end_timestamp_seconds=end,
            )
        )
    return windows


def bucket_transcript(
    transcript: Sequence[TranscriptSegment], window: ChapterWindow
) -> list[TranscriptSegment]:
    """Return the segments whose timestamp falls inside *window*."""
    return [seg for seg in transcript if window.contains(seg.timestamp_seconds)]


def join_text(segments: Sequence[TranscriptSegment]) -> str:
    """Concatenate segment text with single spaces."""
    return " ".join(seg.text for seg in segments)
