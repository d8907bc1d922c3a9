"""Public schema exports."""

from .completion import (
    CompletionMessage,
    CompletionOptions,
    CompletionRequest,
    CompletionResponse,
)
from .telegram import (
    TelegramChat,
    TelegramFileResponse,
    TelegramMessage,
    TelegramPhotoSize,
    TelegramUpdate,
)
from .vision import RecognizeTextRequest, RecognizeTextResponse

__all__ = [
    "CompletionMessage",
    "CompletionOptions",
    "CompletionRequest",
    "CompletionResponse",
    "RecognizeTextRequest",
    "RecognizeTextResponse",
    "TelegramChat",
    "TelegramFileResponse",
    "TelegramMessage",
    "TelegramPhotoSize",
    "TelegramUpdate",
]
