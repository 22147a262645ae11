"""Decoder for the newline-delimited JSON stream returned by /api/generate.

Each line is a JSON object shaped like
``{"response": "...", "done": false, "error": "..."}``.  Fragments are
concatenated in line order until a ``done`` line; an ``error`` line aborts the
decode.  Lines that fail to parse are skipped with a warning.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from video_digest.errors import DecodeWarning, GenerationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamChunk:
    """One decoded protocol line."""

    text_fragment: str | None = None
    is_final: bool = False
    error_message: str | None = None
    problem: str | None = None  # set when a field was present but unusable


def parse_line(line: str) -> StreamChunk | None:
    """Decode one protocol line.

    Returns ``None`` for blank lines.  A ``response`` that is not a string is dropped
    and reported through ``problem``; ``done`` and ``error`` still apply.

    Raises:
        json.JSONDecodeError: If the line is not valid JSON.
        TypeError: If the line is valid JSON but not an object.
    """
    if not line.strip():
        return None
    data = json.loads(line)
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")

    fragment = data.get("response")
    error = data.get("error")
    problem = None
    if fragment is not None and not isinstance(fragment, str):
        problem = f"non-string response fragment of type {type(fragment).__name__}"
    return StreamChunk(
        text_fragment=fragment if isinstance(fragment, str) and fragment else None,
        is_final=data.get("done") is True,
        error_message=str(error) if error else None,
        problem=problem,
    )


class StreamDecoder:
    """Incremental decoder: feed lines until :meth:`feed` reports completion."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._line_number = 0
        self.finished = False
        self.warnings: list[DecodeWarning] = []

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def feed(self, line: str) -> bool:
        """Consume one line; return True once no further lines should be read.

        Raises:
            GenerationError: If the line carries an in-band error.  Text
                accumulated so far is discarded.
        """
        if self.finished:
            return True
        self._line_number += 1

        try:
            chunk = parse_line(line)
        except (json.JSONDecodeError, TypeError) as exc:
            self._warn(line, str(exc))
            return False

        if chunk is None:
            return False
        if chunk.problem is not None:
            self._warn(line, chunk.problem)
        if chunk.error_message is not None:
            self._parts.clear()
            self.finished = True
            raise GenerationError(chunk.error_message)
        if chunk.text_fragment is not None:
            self._parts.append(chunk.text_fragment)
        if chunk.is_final:
            self.finished = True
        return self.finished

    def _warn(self, line: str, reason: str) -> None:
        warning = DecodeWarning(line_number=self._line_number, line=line, reason=reason)
        self.warnings.append(warning)
        logger.warning("Skipping undecodable stream data on line %d: %s", warning.line_number, reason)


def decode_stream(lines: Iterable[str]) -> str:
    """Decode a materialized sequence of protocol lines into the generated text.

    Lines after the ``done`` line are never consumed.  A stream with no
    fragments and no ``done`` line decodes to an empty string.

    Raises:
        GenerationError: If any consumed line carries an in-band error.
    """
    decoder = StreamDecoder()
    for line in lines:
        if decoder.feed(line):
            break
    return decoder.text
