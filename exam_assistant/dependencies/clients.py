"""
Factory functions to provide shared clients and the dispatcher as FastAPI dependencies.
"""

from functools import lru_cache

from exam_assistant.clients import (
    CompletionClient,
    InstructionFetcher,
    TelegramBotClient,
    VisionOCRClient,
)
from exam_assistant.core.config import get_settings
from exam_assistant.services import UpdateDispatcher


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_telegram_client() -> TelegramBotClient:
    """Provide the Telegram Bot API client."""
    settings = _settings()
    return TelegramBotClient(settings.telegram, timeout=settings.http_timeout_seconds)


@lru_cache()
def get_vision_client() -> VisionOCRClient:
    """Provide the OCR client."""
    settings = _settings()
    return VisionOCRClient(settings.vision, timeout=settings.http_timeout_seconds)


@lru_cache()
def get_completion_client() -> CompletionClient:
    """Provide the YandexGPT completion client."""
    settings = _settings()
    return CompletionClient(settings.completion, timeout=settings.http_timeout_seconds)


@lru_cache()
def get_instruction_fetcher() -> InstructionFetcher:
    """Provide the signed object storage fetcher for the system prompt."""
    settings = _settings()
    return InstructionFetcher(settings.storage, timeout=settings.http_timeout_seconds)


def get_update_dispatcher() -> UpdateDispatcher:
    """Build a dispatcher wired to the configured clients."""
    return UpdateDispatcher(
        messenger=get_telegram_client(),
        recognizer=get_vision_client(),
        instructions=get_instruction_fetcher(),
        completion=get_completion_client(),
    )


__all__ = [
    "get_completion_client",
    "get_instruction_fetcher",
    "get_telegram_client",
    "get_update_dispatcher",
    "get_vision_client",
]
