"""
Pydantic models for the subset of the Telegram Bot API the assistant consumes.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TelegramChat(BaseModel):
    """Conversation the update belongs to."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Telegram chat identifier used for replies.")


class TelegramPhotoSize(BaseModel):
    """One resolution variant of an uploaded photo."""

    model_config = ConfigDict(extra="ignore")

    file_id: str = Field(..., description="Opaque identifier passed to getFile.")
    file_unique_id: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    file_size: Optional[int] = None


class TelegramMessage(BaseModel):
    """Inbound message; only text, photo and chat drive routing."""

    model_config = ConfigDict(extra="ignore")

    message_id: Optional[int] = None
    text: str = ""
    photo: List[TelegramPhotoSize] = Field(
        default_factory=list,
        description="Photo variants ordered from lowest to highest resolution.",
    )
    chat: TelegramChat

    @property
    def largest_photo(self) -> Optional[TelegramPhotoSize]:
        return self.photo[-1] if self.photo else None


class TelegramUpdate(BaseModel):
    """Webhook payload delivered by Telegram."""

    model_config = ConfigDict(extra="ignore")

    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None


class TelegramFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    file_id: Optional[str] = None
    file_path: Optional[str] = None


class TelegramFileResponse(BaseModel):
    """Envelope returned by the getFile method."""

    model_config = ConfigDict(extra="ignore")

    ok: bool = False
    result: Optional[TelegramFile] = None
    description: Optional[str] = None


__all__ = [
    "TelegramChat",
    "TelegramFile",
    "TelegramFileResponse",
    "TelegramMessage",
    "TelegramPhotoSize",
    "TelegramUpdate",
]
