"""Expose constructed client wrappers."""

from .completion import CompletionClient
from .object_storage import InstructionFetcher
from .telegram import TelegramBotClient
from .vision import VisionOCRClient

__all__ = [
    "CompletionClient",
    "InstructionFetcher",
    "TelegramBotClient",
    "VisionOCRClient",
]
