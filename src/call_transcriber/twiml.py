"""TwiML documents returned to Twilio.

All documents are built with Twilio's `VoiceResponse`, which escapes text
and attribute values, and are serialized with the XML declaration Twilio
expects at the top of a webhook response.
"""

from twilio.twiml.voice_response import VoiceResponse

GREETING = (
    "Assalamualaikum. This call may be answered by an AI assistant and recorded "
    "for order processing. Please speak after the beep. Press star to finish."
)
NO_RECORDING = "We did not receive a recording. Goodbye."

RECORD_MAX_LENGTH = 120
RECORD_FINISH_KEY = "*"


def sanitize_for_say(text: str) -> str:
    """Make transcribed text safe to speak.

    `&` becomes the word "and" and angle brackets are dropped outright. The
    builder would escape them anyway; the substitution is kept so that callers
    hear the same sentence as before the builder was introduced.
    """
    return text.replace("&", " and ").replace("<", "").replace(">", "")


def record_prompt(action_url: str, voice: str) -> str:
    """Greeting, a `<Record>` posting to `action_url`, and a closing line.

    Twilio only reaches the closing `<Say>` when the `<Record>` verb finishes
    without capturing audio.
    """
    response = VoiceResponse()
    response.say(GREETING, voice=voice)
    response.record(
        action=action_url,
        method="POST",
        max_length=RECORD_MAX_LENGTH,
        play_beep=True,
        finish_on_key=RECORD_FINISH_KEY,
    )
    response.say(NO_RECORDING, voice=voice)
    return response.to_xml(xml_declaration=True)


def transcription_reply(transcript: str, voice: str) -> str:
    response = VoiceResponse()
    response.say(
        f"Thank you. I heard: {sanitize_for_say(transcript)}. "
        "Your order has been recorded. Goodbye.",
        voice=voice,
    )
    return response.to_xml(xml_declaration=True)


def fallback(message: str) -> str:
    response = VoiceResponse()
    response.say(message)
    return response.to_xml(xml_declaration=True)
