"""Failure taxonomy for the recording callback.

Every failure ends the call with a spoken fallback sentence; the sentence is
chosen from `FALLBACK_MESSAGES` by the handler's top level only.
"""

from enum import Enum


class FailureReason(str, Enum):
    MISSING_RECORDING_REFERENCE = "missing_recording_reference"
    UPSTREAM_FETCH_FAILURE = "upstream_fetch_failure"
    TRANSCRIPTION_SERVICE_FAILURE = "transcription_service_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"


FALLBACK_MESSAGES: dict[FailureReason, str] = {
    FailureReason.MISSING_RECORDING_REFERENCE: "Recording not found. Please try again.",
    FailureReason.UPSTREAM_FETCH_FAILURE: "Sorry, could not fetch the recording.",
    FailureReason.TRANSCRIPTION_SERVICE_FAILURE: "Sorry, transcription failed.",
    FailureReason.UNEXPECTED_FAILURE: "Something went wrong. Please try again later.",
}


class RecordingPipelineError(Exception):
    """A callback stage failed in a way the caller should be told about."""

    def __init__(self, reason: FailureReason, detail: str = "") -> None:
        super().__init__(detail or reason.value)
        self.reason = reason
        self.detail = detail

    @property
    def fallback_message(self) -> str:
        return FALLBACK_MESSAGES[self.reason]
