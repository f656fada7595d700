"""ASGI app entrypoint for the call transcriber service.

This module exposes the FastAPI `app` object, a minimal healthcheck
endpoint used by orchestration tooling, and `run()` for local serving.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .api import webhooks as webhooks_router
from .config import get_settings
from .logging_config import setup_logging
from .schemas import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Logging is configured by the server process, not on import
    setup_logging(get_settings().log_level)
    yield


app = FastAPI(title="Call Transcriber", lifespan=lifespan)

# Twilio webhooks are mounted at the root: /entry and /callback
app.include_router(webhooks_router.router, tags=["voice"])


@app.get("/health", response_model=HealthResponse, status_code=200)
async def health() -> HealthResponse:
    """Return a simple health status in a predictable JSON schema."""
    return HealthResponse()


def run() -> None:
    settings = get_settings()
    uvicorn.run("call_transcriber.main:app", host=settings.host, port=settings.port)
