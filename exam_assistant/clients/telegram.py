"""Thin Telegram Bot API wrapper: replies, file lookup and file download."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from exam_assistant.core.config import TelegramSettings
from exam_assistant.core.errors import TelegramFileError
from exam_assistant.schemas.telegram import TelegramFileResponse

logger = logging.getLogger(__name__)


class TelegramBotClient:
    """Talk to the Bot API on behalf of the configured bot token."""

    def __init__(
        self,
        settings: TelegramSettings,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._timeout = timeout
        self._transport = transport

    @property
    def _api_base(self) -> str:
        return f"{self._settings.api_base_url.rstrip('/')}/bot{self._settings.bot_token}"

    @property
    def _file_base(self) -> str:
        return f"{self._settings.api_base_url.rstrip('/')}/file/bot{self._settings.bot_token}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send ``text`` to ``chat_id``; failures are logged, never raised."""
        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self._api_base}/sendMessage",
                    data={"chat_id": str(chat_id), "text": text},
                )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            # Never log the request URL: it embeds the bot token.
            logger.warning(
                "chat_id=%s sendMessage failed: %s", chat_id, type(exc).__name__
            )

    async def get_file_path(self, file_id: str) -> str:
        """Resolve ``file_id`` into the path used for downloading the file."""
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self._api_base}/getFile", params={"file_id": file_id}
                )
            response.raise_for_status()
            payload = TelegramFileResponse.model_validate_json(response.content)
        except (httpx.HTTPError, ValidationError) as exc:
            raise TelegramFileError(
                f"getFile failed for {file_id}: {type(exc).__name__}"
            ) from exc

        if not payload.ok or payload.result is None or not payload.result.file_path:
            raise TelegramFileError(
                f"Telegram getFile response was not OK: {payload.description or 'no file path'}"
            )
        return payload.result.file_path

    async def download_file(self, file_path: str) -> bytes:
        """Download the raw bytes of a file previously resolved with getFile."""
        try:
            async with self._client() as client:
                response = await client.get(f"{self._file_base}/{file_path}")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TelegramFileError(
                f"download failed for {file_path}: {type(exc).__name__}"
            ) from exc
        return response.content


__all__ = ["TelegramBotClient"]
