"""Clock timestamp conversion ("1:02:03" <-> seconds)."""

from __future__ import annotations

import logging
import re

from video_digest.errors import FormatError

logger = logging.getLogger(__name__)

_GROUP_RE = re.compile(r"^\d+(?:\.\d+)?$")


def parse_clock(text: str) -> float:
    """Convert clock text to seconds.

    The rightmost ``:``-separated group is seconds; each group to its left
    multiplies by a further 60, so ``"1:02:03"`` is 3723.  Empty groups count
    as zero, which makes ``parse_clock("") == 0``.

    Raises:
        FormatError: If any group is not a non-negative decimal number.
    """
    seconds = 0.0
    multiplier = 1
    for group in reversed(text.strip().split(":")):
        group = group.strip()
        if group:
            if not _GROUP_RE.match(group):
                raise FormatError(f"Invalid timestamp {text!r}: non-numeric group {group!r}")
            seconds += float(group) * multiplier
        multiplier *= 60
    return seconds


def parse_clock_or_default(text: str | None, default: float = 0.0) -> float:
    """Lenient :func:`parse_clock`: missing or malformed text yields *default*."""
    if text is None:
        return default
    try:
        return parse_clock(text)
    except FormatError as exc:
        logger.debug("Defaulting timestamp to %s: %s", default, exc)
        return default


def format_clock(seconds: float) -> str:
    """Render seconds as ``M:SS`` (or ``H:MM:SS`` from one hour up)."""
    if seconds < 0:
        raise FormatError(f"Cannot format negative time {seconds!r}")
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
