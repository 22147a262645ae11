"""HTTP client for an Ollama-compatible /api/generate endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from video_digest.errors import GenerationError, HttpError
from video_digest.generation.stream import StreamDecoder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingOptions:
    """Generation parameters sent as ``options`` on the wire."""

    temperature: float
    max_tokens: int


@dataclass(frozen=True)
class GenerationRequest:
    """A single generation call."""

    model: str
    prompt: str
    sampling: SamplingOptions
    structured_output: bool = False

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON request body."""
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": self.prompt,
            "options": {
                "temperature": self.sampling.temperature,
                "num_predict": self.sampling.max_tokens,
            },
        }
        # Guarantees well-formed JSON fragments only, not the target schema.
        if self.structured_output:
            payload["format"] = "json"
        return payload


class TextGenerator(Protocol):
    """Anything that turns a :class:`GenerationRequest` into generated text."""

    async def generate(self, request: GenerationRequest) -> str: ...


class GenerationClient:
    """Issue one streamed generation request per call and decode the result.

    No retry, no caching.  With the default ``timeout=None`` a hung service
    hangs the call; wrap it in ``asyncio.wait_for`` for bounded latency.

    Args:
        base_url: Service root, e.g. ``http://localhost:11434``.
        timeout: Per-request timeout in seconds (``None`` waits indefinitely).
        http_client: Optional shared ``httpx.AsyncClient``; when omitted each
            call opens and closes its own.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/generate"

    async def generate(self, request: GenerationRequest) -> str:
        """Run *request* and return the decoded text.

        Raises:
            HttpError: On a non-2xx response status.
            GenerationError: On an in-band stream error, an unreachable service,
                or any other httpx failure (undecodable body, redirects, bad URL).
        """
        logger.info(
            "Generating with %s (%d prompt chars, structured=%s)",
            request.model,
            len(request.prompt),
            request.structured_output,
        )
        try:
            if self._http_client is not None:
                return await self._stream(self._http_client, request)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await self._stream(client, request)
        except httpx.TransportError as exc:
            raise GenerationError(f"Generation service unreachable: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GenerationError(f"Generation request failed: {exc}") from exc

    async def _stream(self, client: httpx.AsyncClient, request: GenerationRequest) -> str:
        decoder = StreamDecoder()
        # An injected client keeps its own timeout unless one was given here.
        options: dict[str, Any] = {} if self.timeout is None else {"timeout": self.timeout}
        async with client.stream(
            "POST",
            self.endpoint,
            json=request.to_payload(),
            headers={"Content-Type": "application/json"},
            **options,
        ) as response:
            if not response.is_success:
                raise HttpError(response.status_code, response.reason_phrase)
            async for line in response.aiter_lines():
                if decoder.feed(line):
                    break

        if decoder.warnings:
            logger.warning("Skipped %d undecodable stream lines", len(decoder.warnings))
        return decoder.text
