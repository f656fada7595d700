"""Shared fixtures: injected settings and a fake outbound HTTP layer."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List

import httpx
import pytest
from fastapi.testclient import TestClient

from call_transcriber.api.webhooks import get_recording_handler
from call_transcriber.config import Settings, get_settings
from call_transcriber.handlers.recording import RecordingProcessingHandler
from call_transcriber.main import app


class FakeUpstream:
    """Stands in for Twilio media and the OpenAI API behind httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.recording = httpx.Response(200, content=b"RIFF....WAVEfmt ", headers={"content-type": "audio/x-wav"})
        self.transcription = httpx.Response(200, json={"text": "two pizzas please"})
        self.error: Exception | None = None
        # URL -> Location header answered with a 302
        self.redirects: Dict[str, str] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if str(request.url) in self.redirects:
            return httpx.Response(302, headers={"location": self.redirects[str(request.url)]})
        template = self.transcription if request.url.host == "api.openai.com" else self.recording
        # A fresh response per request; httpx closes the one it hands back
        return httpx.Response(template.status_code, headers=template.headers, content=template.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def requests_to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        twilio_account_sid="AC123",
        twilio_auth_token="secret",
        openai_api_key="sk-test",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_client(upstream: FakeUpstream) -> Iterator[Callable[[Settings], TestClient]]:
    def _make(settings: Settings) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_recording_handler] = lambda: RecordingProcessingHandler(
            settings, transport=upstream.transport
        )
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, settings: Settings) -> TestClient:
    return make_client(settings)
