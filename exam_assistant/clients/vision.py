"""Client wrapper for the Yandex Vision OCR recognizeText endpoint."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from exam_assistant.core.config import VisionSettings
from exam_assistant.core.errors import TextNotFoundError, VisionServiceError
from exam_assistant.schemas.vision import RecognizeTextRequest, RecognizeTextResponse


class VisionOCRClient:
    """Recognize printed or handwritten text on an image."""

    def __init__(
        self,
        settings: VisionSettings,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._timeout = timeout
        self._transport = transport

    async def recognize(self, image_base64: str) -> str:
        """Return every recognized line, each terminated by a newline.

        Lines keep the order returned by the service. Raises
        ``TextNotFoundError`` when the response holds no text blocks or no lines.
        """

        body = RecognizeTextRequest(content=image_base64)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Api-Key {self._settings.api_key}",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    str(self._settings.endpoint),
                    json=body.model_dump(by_alias=True),
                    headers=headers,
                )
            response.raise_for_status()
            payload = RecognizeTextResponse.model_validate_json(response.content)
        except (httpx.HTTPError, ValidationError) as exc:
            raise VisionServiceError(f"recognizeText failed: {exc}") from exc

        text = "".join(
            f"{line.text}\n" for block in payload.blocks for line in block.lines
        )
        if not text:
            raise TextNotFoundError("no text found")
        return text


__all__ = ["VisionOCRClient"]
