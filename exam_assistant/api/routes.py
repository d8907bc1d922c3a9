"""
HTTP routes: health check and the Telegram webhook.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from exam_assistant.dependencies import get_update_dispatcher
from exam_assistant.services import UpdateDispatcher, process_webhook

router = APIRouter()
logger = logging.getLogger(__name__)

# Every verb is routed here so unsupported ones get the fixed 404 body.
_WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.api_route("/webhook", methods=_WEBHOOK_METHODS)
async def telegram_webhook(
    request: Request,
    dispatcher: Annotated[UpdateDispatcher, Depends(get_update_dispatcher)],
) -> Response:
    """Answer one Telegram update; failures surface in the chat, not the status."""

    body = await request.body()
    result = await process_webhook(request.method, body, dispatcher)
    return PlainTextResponse(result.body, status_code=result.status_code)


__all__ = ["router"]
