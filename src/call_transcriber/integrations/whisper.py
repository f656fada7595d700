"""Speech-to-text through OpenAI's audio transcription endpoint."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..errors import FailureReason, RecordingPipelineError
from .recordings import AudioPayload

logger = logging.getLogger(__name__)

UPLOAD_FILENAME = "recording.wav"
NO_TRANSCRIPT = "Sorry, I could not transcribe your message."


async def transcribe_audio(
    audio: AudioPayload,
    api_key: Optional[str],
    url: str = "https://api.openai.com/v1/audio/transcriptions",
    model: str = "whisper-1",
    timeout: float = 120.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Upload `audio` as multipart form data and return the transcript text.

    Without an API key the request goes out unauthenticated and the service's
    rejection surfaces as a transcription failure.

    Raises:
        RecordingPipelineError: the service answered with a non-2xx status.
    """
    headers = {}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    else:
        logger.warning("OPENAI_API_KEY is not set; sending transcription request without credentials")

    files = {"file": (UPLOAD_FILENAME, audio.content, audio.content_type)}
    data = {"model": model}

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        resp = await client.post(url, headers=headers, data=data, files=files)

    if not resp.is_success:
        logger.error("OpenAI transcription error: %s - %s", resp.status_code, resp.text)
        raise RecordingPipelineError(
            FailureReason.TRANSCRIPTION_SERVICE_FAILURE,
            f"transcription returned {resp.status_code}",
        )

    body = resp.json()
    if not isinstance(body, dict):
        logger.warning("Unexpected transcription response body: %r", body)
        return NO_TRANSCRIPT
    return body.get("text") or NO_TRANSCRIPT
