"""Webhook endpoints called by Twilio.

`/entry` is configured as the phone number's voice webhook; `/callback` is
the `<Record>` action it points Twilio at.
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse

from ..config import Settings, get_settings
from ..handlers.recording import RecordingProcessingHandler
from ..handlers.voice import CALLBACK_PATH, CallEntryHandler

TWIML_MEDIA_TYPE = "text/xml"

router = APIRouter()


def get_call_entry_handler(settings: Settings = Depends(get_settings)) -> CallEntryHandler:
    return CallEntryHandler(settings)


def get_recording_handler(settings: Settings = Depends(get_settings)) -> RecordingProcessingHandler:
    return RecordingProcessingHandler(settings)


@router.api_route("/entry", methods=["GET", "POST"])
async def call_entry(
    request: Request,
    handler: CallEntryHandler = Depends(get_call_entry_handler),
) -> Response:
    """Answer an inbound call with a greeting and a `<Record>` verb."""
    twiml_xml = handler.handle(request.headers, default_host=request.url.netloc)
    return Response(content=twiml_xml, media_type=TWIML_MEDIA_TYPE)


async def entry_method_not_allowed(request: Request) -> Response:
    return PlainTextResponse("Method not allowed", status_code=405)


# Registered after call_entry and without a method list, so it only sees the
# verbs call_entry does not accept, including non-standard ones. Without it
# Starlette answers those with a JSON error body.
router.add_route("/entry", entry_method_not_allowed, methods=None, include_in_schema=False)


@router.post(CALLBACK_PATH)
async def recording_callback(
    request: Request,
    handler: RecordingProcessingHandler = Depends(get_recording_handler),
) -> Response:
    """Transcribe the finished recording and read it back to the caller.

    Always 200: Twilio cannot do anything useful with an error status in the
    middle of a call, so failures are spoken instead.
    """
    twiml_xml = await handler.handle(request)
    return Response(content=twiml_xml, media_type=TWIML_MEDIA_TYPE)
