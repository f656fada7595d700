"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed settings for environment-driven configuration.

    Credentials are optional: a missing Twilio SID/token simply disables
    Basic auth on the recording download, and a missing OpenAI key sends an
    unauthenticated transcription request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    openai_api_key: str | None = None

    transcription_url: str = "https://api.openai.com/v1/audio/transcriptions"
    transcription_model: str = "whisper-1"
    say_voice: str = "alice"

    # Seconds
    recording_fetch_timeout: float = 60.0
    transcription_timeout: float = 120.0

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache
def get_settings() -> Settings:
    return Settings()
