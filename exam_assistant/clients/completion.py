"""Client wrapper for YandexGPT text completion."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from exam_assistant.core.config import CompletionSettings
from exam_assistant.core.errors import CompletionServiceError, NoAlternativesError
from exam_assistant.schemas.completion import (
    CompletionMessage,
    CompletionOptions,
    CompletionRequest,
    CompletionResponse,
)

logger = logging.getLogger(__name__)


class CompletionClient:
    """Ask the language model a single question under a system prompt."""

    def __init__(
        self,
        settings: CompletionSettings,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._timeout = timeout
        self._transport = transport

    def build_request(self, system_prompt: str, question: str) -> CompletionRequest:
        return CompletionRequest(
            model_uri=self._settings.model_uri,
            completion_options=CompletionOptions(
                stream=False,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
            ),
            messages=[
                CompletionMessage(role="system", text=system_prompt),
                CompletionMessage(role="user", text=question),
            ],
        )

    async def complete(self, system_prompt: str, question: str) -> str:
        """Return the text of the first alternative, unmodified."""

        body = self.build_request(system_prompt, question)
        headers = {"Authorization": f"Api-Key {self._settings.api_key}"}

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
            payload = CompletionResponse.model_validate_json(response.content)
        except (httpx.HTTPError, ValidationError) as exc:
            raise CompletionServiceError(f"completion request failed: {exc}") from exc

        alternatives = payload.result.alternatives
        if not alternatives:
            raise NoAlternativesError("can't answer")
        logger.debug("Completion returned %d alternative(s)", len(alternatives))
        return alternatives[0].message.text


__all__ = ["CompletionClient"]
