"""Download call recordings from Twilio.

Twilio serves a recording at its `RecordingUrl` in several formats; the
`.wav` suffix selects the uncompressed one. Accounts with protected media
require HTTP Basic auth using the account SID and auth token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..errors import FailureReason, RecordingPipelineError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "audio/wav"


@dataclass(frozen=True)
class AudioPayload:
    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE


def wav_url(recording_url: str) -> str:
    if recording_url.endswith(".wav"):
        return recording_url
    return recording_url + ".wav"


def basic_auth(account_sid: Optional[str], auth_token: Optional[str]) -> Optional[httpx.BasicAuth]:
    """Return Basic credentials, or None unless both parts are set."""
    if not account_sid or not auth_token:
        return None
    return httpx.BasicAuth(account_sid, auth_token)


async def fetch_recording(
    recording_url: str,
    account_sid: Optional[str] = None,
    auth_token: Optional[str] = None,
    timeout: float = 60.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AudioPayload:
    """Fetch the WAV rendition of a recording.

    Raises:
        RecordingPipelineError: Twilio answered with a non-2xx status.
    """
    url = wav_url(recording_url)
    auth = basic_auth(account_sid, auth_token)
    if auth is None:
        logger.debug("Twilio credentials not set; fetching %s without auth", url)

    # Twilio may redirect media to a storage host; httpx drops the auth header
    # when the redirect crosses origins
    async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
        resp = await client.get(url, auth=auth)

    if not resp.is_success:
        logger.error("Failed to fetch recording: %s %s", resp.status_code, resp.text)
        raise RecordingPipelineError(
            FailureReason.UPSTREAM_FETCH_FAILURE,
            f"recording fetch returned {resp.status_code}",
        )

    content_type = resp.headers.get("content-type") or DEFAULT_CONTENT_TYPE
    logger.info("Fetched recording %s (%d bytes, %s)", url, len(resp.content), content_type)
    return AudioPayload(content=resp.content, content_type=content_type)
