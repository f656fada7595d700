"""Inbound call handling.

The entry webhook greets the caller and records their message. Twilio posts
the finished recording to the callback endpoint, whose absolute URL is
rebuilt from the headers of the inbound request so that the service works
behind proxies and tunnels without a configured public URL.
"""
from typing import Mapping, Optional

from .. import twiml
from ..config import Settings

CALLBACK_PATH = "/callback"


def external_base_url(headers: Mapping[str, str], default_host: Optional[str] = None) -> str:
    """Return `proto://host` as seen by the caller.

    Args:
        headers: Request headers (case-insensitive mapping).
        default_host: Used when neither X-Forwarded-Host nor Host is present.
    """
    host = headers.get("x-forwarded-host") or headers.get("host") or default_host or "localhost"
    # Proxy chains append to X-Forwarded-Proto; the first entry is the client's
    proto = (headers.get("x-forwarded-proto") or "https").split(",")[0].strip() or "https"
    return f"{proto}://{host}"


class CallEntryHandler:
    """Build the `<Record>` TwiML for a new inbound call."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def callback_url(self, headers: Mapping[str, str], default_host: Optional[str] = None) -> str:
        return external_base_url(headers, default_host) + CALLBACK_PATH

    def handle(self, headers: Mapping[str, str], default_host: Optional[str] = None) -> str:
        return twiml.record_prompt(self.callback_url(headers, default_host), voice=self.settings.say_voice)
