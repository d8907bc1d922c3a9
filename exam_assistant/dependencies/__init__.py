"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_completion_client,
    get_instruction_fetcher,
    get_telegram_client,
    get_update_dispatcher,
    get_vision_client,
)

__all__ = [
    "get_completion_client",
    "get_instruction_fetcher",
    "get_telegram_client",
    "get_update_dispatcher",
    "get_vision_client",
]
