"""Shared test doubles (no generation service required)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from video_digest.config import Settings
from video_digest.generation.client import GenerationRequest

Reply = str | Exception


class FakeGenerator:
    """In-memory TextGenerator.

    Replies come from a callable of the request or a queue consumed in call
    order.  Exceptions are raised instead of returned.  Tracks the peak
    number of concurrent calls.
    """

    def __init__(self, replies: list[Reply] | Callable[[GenerationRequest], Reply]) -> None:
        self._replies = replies
        self.requests: list[GenerationRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # Yield so concurrent callers can overlap.
            await asyncio.sleep(0)
            reply = self._replies(request) if callable(self._replies) else self._replies.pop(0)
        finally:
            self.in_flight -= 1
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]
