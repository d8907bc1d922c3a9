"""Shared inbound handling for the HTTP route and the serverless entry point."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Protocol

from pydantic import ValidationError

from exam_assistant.core.errors import MalformedUpdateError
from exam_assistant.schemas.telegram import TelegramUpdate

logger = logging.getLogger(__name__)

ACCEPTED_METHODS = frozenset({"GET", "POST"})
NOT_FOUND_BODY = "not found"
MALFORMED_UPDATE_BODY = "failed to parse update"


class UpdateHandler(Protocol):
    async def handle(self, update: TelegramUpdate) -> None: ...


@dataclass(slots=True)
class WebhookResult:
    """Status and plain-text body returned to the transport layer."""

    status_code: int
    body: str = ""


def parse_update(raw_body: bytes | str) -> TelegramUpdate:
    """Decode a webhook body, raising ``MalformedUpdateError`` on bad JSON or shape."""
    try:
        return TelegramUpdate.model_validate_json(raw_body)
    except ValidationError as exc:
        raise MalformedUpdateError(str(exc)) from exc


async def process_webhook(
    method: str, raw_body: bytes | str, dispatcher: UpdateHandler
) -> WebhookResult:
    """Apply the method filter, decode the update and hand it to ``dispatcher``.

    Business outcomes always map to 200; users learn about failures through the
    chat reply.
    """

    if method.upper() not in ACCEPTED_METHODS:
        return WebhookResult(HTTPStatus.NOT_FOUND, NOT_FOUND_BODY)

    try:
        update = parse_update(raw_body)
    except MalformedUpdateError:
        logger.warning("Rejected malformed webhook body", exc_info=True)
        return WebhookResult(HTTPStatus.BAD_REQUEST, MALFORMED_UPDATE_BODY)

    await dispatcher.handle(update)
    return WebhookResult(HTTPStatus.OK)


__all__ = [
    "ACCEPTED_METHODS",
    "MALFORMED_UPDATE_BODY",
    "NOT_FOUND_BODY",
    "UpdateHandler",
    "WebhookResult",
    "parse_update",
    "process_webhook",
]
