"""Recording callback handling.

Twilio calls back once a `<Record>` verb completes. The handler runs a fixed
sequence of stages: read the callback body, download the recording,
transcribe it and speak the transcript back. A stage that cannot continue
raises `RecordingPipelineError`; `RecordingProcessingHandler.handle` turns
that (or any other exception) into a spoken fallback so Twilio always gets a
playable 200 response.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl

import httpx
from fastapi import Request

from .. import twiml
from ..config import Settings
from ..errors import FALLBACK_MESSAGES, FailureReason, RecordingPipelineError
from ..integrations import recordings, whisper
from ..schemas import RecordingCallback

logger = logging.getLogger(__name__)


async def read_callback_payload(request: Request) -> Dict[str, Any]:
    """Return the callback fields as a plain dict.

    Uses the body as parsed by the framework (form or JSON) when it yields
    anything, otherwise decodes the raw bytes as URL-encoded form data.
    """
    # Cache the raw body first; request.form() re-reads it from the cache
    raw = await request.body()
    content_type = request.headers.get("content-type", "")

    payload: Dict[str, Any] = {}
    if "application/x-www-form-urlencoded" in content_type or "form-data" in content_type:
        form = await request.form()
        payload = {k: v for k, v in form.items() if isinstance(v, str)}
    elif "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            payload = data

    if not payload and raw:
        payload = dict(parse_qsl(raw.decode("utf-8", errors="replace"), keep_blank_values=True))

    return payload


class RecordingProcessingHandler:
    """Turn a recording callback into a spoken transcript."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.settings = settings
        # Injected by tests; None means a real network transport
        self.transport = transport

    async def handle(self, request: Request) -> str:
        """Always returns a TwiML document, never raises."""
        try:
            payload = await read_callback_payload(request)
            transcript = await self.process(payload)
        except RecordingPipelineError as exc:
            logger.warning("Recording callback stopped: %s (%s)", exc.reason.value, exc)
            return twiml.fallback(exc.fallback_message)
        except Exception:
            logger.exception("Error in recording callback")
            return twiml.fallback(FALLBACK_MESSAGES[FailureReason.UNEXPECTED_FAILURE])

        return twiml.transcription_reply(transcript, voice=self.settings.say_voice)

    async def process(self, payload: Mapping[str, Any]) -> str:
        """Run the fetch and transcribe stages; return the raw transcript."""
        callback = RecordingCallback.model_validate(dict(payload))
        if not callback.RecordingUrl:
            raise RecordingPipelineError(FailureReason.MISSING_RECORDING_REFERENCE, "no RecordingUrl in callback")

        logger.info(
            "Processing recording for call %s (duration=%s)",
            callback.CallSid or "unknown",
            callback.RecordingDuration or "unknown",
        )

        audio = await recordings.fetch_recording(
            callback.RecordingUrl,
            account_sid=self.settings.twilio_account_sid,
            auth_token=self.settings.twilio_auth_token,
            timeout=self.settings.recording_fetch_timeout,
            transport=self.transport,
        )

        transcript = await whisper.transcribe_audio(
            audio,
            api_key=self.settings.openai_api_key,
            url=self.settings.transcription_url,
            model=self.settings.transcription_model,
            timeout=self.settings.transcription_timeout,
            transport=self.transport,
        )
        logger.info("Transcription result: %s", transcript)
        return transcript
