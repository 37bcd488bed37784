"""HTTP client for the hosted recording/transcription backend.

The backend accepts a multipart upload with the audio under the
``audioFile`` field and answers ``{"transcription": ..., "analysis": ...}``.
Transport failures, non-2xx responses and malformed bodies are all raised
as :class:`TranscriptionError`; the caller decides whether to retry.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from smartflow_rules.interfaces import TranscriptionBackend
from smartflow_rules.models.extraction import TranscriptionResult

logger = logging.getLogger(__name__)

AUDIO_FIELD = "audioFile"


class TranscriptionError(RuntimeError):
    """The transcription backend could not produce a result."""


class HttpTranscriptionBackend(TranscriptionBackend):
    """:class:`TranscriptionBackend` over HTTP using ``httpx``.

    Args:
        url: upload endpoint
        timeout: seconds before the request is abandoned
        client: optional pre-built ``httpx.AsyncClient`` (tests pass one
            with a mock transport); when given, the caller owns its lifecycle
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client

    async def transcribe(self, audio: bytes, filename: str) -> TranscriptionResult:
        files = {AUDIO_FIELD: (filename, audio, _content_type(filename))}
        try:
            if self._client is not None:
                response = await self._client.post(self._url, files=files, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._url, files=files)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Transcription backend returned %d for %s",
                exc.response.status_code, filename,
            )
            raise TranscriptionError(
                f"transcription backend returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Transcription request failed for %s: %s", filename, exc)
            raise TranscriptionError(f"transcription request failed: {exc}") from exc

        try:
            result = TranscriptionResult.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TranscriptionError("transcription backend sent a malformed body") from exc

        logger.info(
            "Transcribed %s: %d chars of transcript, %d chars of analysis",
            filename, len(result.transcription), len(result.analysis),
        )
        return result


def _content_type(filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return {
        "webm": "audio/webm",
        "wav": "audio/wav",
        "mp3": "audio/mpeg",
        "m4a": "audio/mp4",
        "ogg": "audio/ogg",
    }.get(ext, "application/octet-stream")
