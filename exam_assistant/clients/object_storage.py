"""Fetch the completion system prompt from S3-compatible object storage."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

import httpx

from exam_assistant.core.config import StorageSettings
from exam_assistant.core.errors import InstructionFetchError
from exam_assistant.services.request_signer import SigningContext, sign_get_request

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InstructionFetcher:
    """Download the instruction document with a signed GET on every call."""

    def __init__(
        self,
        settings: StorageSettings,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings
        self._timeout = timeout
        self._transport = transport
        self._clock = clock

    async def fetch(self, path: str | None = None) -> str:
        """Return the instruction text stored at ``path`` (defaults to settings).

        Raises ``InstructionFetchError`` on network failures, non-200 statuses
        and malformed instruction paths.
        """

        url = path or self._settings.instruction_path
        context = SigningContext.from_datetime(
            secret_key=self._settings.secret_key,
            region=self._settings.region,
            service=self._settings.service,
            moment=self._clock(),
        )
        headers = sign_get_request(
            url, access_key=self._settings.access_key, context=context
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise InstructionFetchError(f"Instruction request failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise InstructionFetchError(
                f"Unexpected status code from object storage: {response.status_code}"
            )
        logger.debug("Fetched instruction document (%d bytes)", len(response.content))
        return response.text


__all__ = ["InstructionFetcher"]
