"""Pydantic schemas for webhook payloads and responses."""

from pydantic import BaseModel, ConfigDict


class RecordingCallback(BaseModel):
    """Fields of Twilio's `<Record>` action callback that we read."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    RecordingUrl: str | None = None
    RecordingSid: str | None = None
    RecordingDuration: str | None = None
    CallSid: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
