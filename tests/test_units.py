import httpx
import pytest

from call_transcriber import twiml
from call_transcriber.errors import FALLBACK_MESSAGES, FailureReason, RecordingPipelineError
from call_transcriber.integrations import recordings, whisper
from call_transcriber.integrations.recordings import AudioPayload


@pytest.mark.parametrize(
    "text, expected",
    [
        ("two pizzas please", "two pizzas please"),
        ("fish & chips", "fish  and  chips"),
        ("<b>bold</b>", "bbold/b"),
        ("a<>b", "ab"),
    ],
)
def test_sanitize_for_say(text, expected):
    assert twiml.sanitize_for_say(text) == expected


def test_fallback_has_no_voice():
    xml = twiml.fallback("Sorry, transcription failed.")

    assert xml == '<?xml version="1.0" encoding="UTF-8"?><Response><Say>Sorry, transcription failed.</Say></Response>'


def test_every_reason_has_a_message():
    assert set(FALLBACK_MESSAGES) == set(FailureReason)


def test_pipeline_error_message():
    exc = RecordingPipelineError(FailureReason.UPSTREAM_FETCH_FAILURE, "recording fetch returned 404")

    assert exc.fallback_message == "Sorry, could not fetch the recording."
    assert str(exc) == "recording fetch returned 404"


def test_basic_auth_requires_both_parts():
    assert recordings.basic_auth("AC1", None) is None
    assert recordings.basic_auth("", "token") is None
    assert isinstance(recordings.basic_auth("AC1", "token"), httpx.BasicAuth)


@pytest.mark.asyncio
async def test_fetch_recording_defaults_content_type():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"audio"))

    audio = await recordings.fetch_recording("https://media.example.com/RE1", transport=transport)

    assert audio == AudioPayload(content=b"audio", content_type="audio/wav")


@pytest.mark.asyncio
async def test_fetch_recording_raises_on_error_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(403, text="forbidden"))

    with pytest.raises(RecordingPipelineError) as excinfo:
        await recordings.fetch_recording("https://media.example.com/RE1", transport=transport)

    assert excinfo.value.reason is FailureReason.UPSTREAM_FETCH_FAILURE


@pytest.mark.asyncio
async def test_transcribe_audio_uses_configured_model_and_url():
    seen = []

    def respond(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"text": "hello"})

    text = await whisper.transcribe_audio(
        AudioPayload(b"audio"),
        api_key="sk-test",
        url="https://stt.example.com/v1/audio/transcriptions",
        model="gpt-4o-transcribe",
        transport=httpx.MockTransport(respond),
    )

    assert text == "hello"
    assert seen[0].url.host == "stt.example.com"
    assert b"gpt-4o-transcribe" in seen[0].content


@pytest.mark.asyncio
async def test_transcribe_audio_empty_text():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"text": ""}))

    text = await whisper.transcribe_audio(AudioPayload(b"audio"), api_key="sk-test", transport=transport)

    assert text == whisper.NO_TRANSCRIPT


@pytest.mark.asyncio
async def test_transcribe_audio_null_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"null", headers={"content-type": "application/json"}))

    text = await whisper.transcribe_audio(AudioPayload(b"audio"), api_key="sk-test", transport=transport)

    assert text == whisper.NO_TRANSCRIPT
