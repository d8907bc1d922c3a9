"""
FastAPI application entrypoint for the OS exam assistant.
"""

from __future__ import annotations

from fastapi import FastAPI

from exam_assistant.api.routes import router as api_router
from exam_assistant.core.config import get_settings
from exam_assistant.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="OS Exam Assistant",
        version="0.1.0",
        description="Telegram webhook answering operating systems exam questions.",
    )
    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
