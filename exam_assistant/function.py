"""
Serverless entrypoint for deploying the webhook as a cloud function.

The platform invokes ``handler(event, context)`` with an HTTP-style event
(``httpMethod``, ``body``, ``isBase64Encoded``) and expects a dict carrying
``statusCode`` and ``body`` back.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Any, Dict

from exam_assistant.core.config import get_settings
from exam_assistant.core.logging import configure_logging
from exam_assistant.dependencies import get_update_dispatcher
from exam_assistant.services import process_webhook

logger = logging.getLogger(__name__)


def _decode_body(event: Dict[str, Any]) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode("utf-8") if isinstance(body, str) else body


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Process one webhook invocation and return the HTTP response for it."""
    configure_logging(get_settings().log_level)

    method = str(event.get("httpMethod") or "")
    try:
        body = _decode_body(event)
    except (binascii.Error, ValueError):
        logger.warning("Webhook body is not valid base64")
        # An empty body is rejected by the update parser like any malformed JSON.
        body = b""
    result = asyncio.run(process_webhook(method, body, get_update_dispatcher()))
    return {"statusCode": int(result.status_code), "body": result.body}


__all__ = ["handler"]
