"""
Application configuration models and helpers.

Centralizes settings management so the webhook app, the serverless entry point
and the operational scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class TelegramSettings(BaseSettings):
    """Credentials for the Telegram Bot API."""

    model_config = SettingsConfigDict(populate_by_name=True)

    bot_token: str = Field(..., validation_alias="TG_BOT_KEY")
    api_base_url: str = Field(
        "https://api.telegram.org",
        validation_alias="TELEGRAM_API_BASE",
        description="Base URL for Bot API calls and file downloads.",
    )


class VisionSettings(BaseSettings):
    """Configuration for the Yandex Vision OCR endpoint."""

    model_config = SettingsConfigDict(populate_by_name=True)

    api_key: str = Field(..., validation_alias="VISION_API_KEY")
    endpoint: AnyHttpUrl = Field(
        "https://ocr.api.cloud.yandex.net/ocr/v1/recognizeText",
        validation_alias="VISION_OCR_URL",
    )


class CompletionSettings(BaseSettings):
    """Configuration for YandexGPT completion access."""

    model_config = SettingsConfigDict(populate_by_name=True)

    api_key: str = Field(..., validation_alias="YAGPT_API_KEY")
    folder_id: str = Field(..., validation_alias="FOLDER_ID")
    model_name: str = Field("yandexgpt", validation_alias="YAGPT_MODEL_NAME")
    max_tokens: int = Field(1000, validation_alias="YAGPT_MAX_TOKENS", gt=0)
    temperature: float = Field(0.1, validation_alias="YAGPT_TEMPERATURE", ge=0, le=1)
    endpoint: AnyHttpUrl = Field(
        "https://llm.api.cloud.yandex.net/foundationModels/v1/completion",
        validation_alias="YAGPT_COMPLETION_URL",
    )

    @property
    def model_uri(self) -> str:
        return f"gpt://{self.folder_id}/{self.model_name}"


class StorageSettings(BaseSettings):
    """Object storage credentials and the location of the system prompt."""

    model_config = SettingsConfigDict(populate_by_name=True)

    access_key: str = Field(..., validation_alias="S3_ACCESS_KEY")
    secret_key: str = Field(..., validation_alias="S3_SECRET_KEY")
    instruction_path: str = Field(
        ...,
        validation_alias="YAGPT_INSTRUCTION_PATH",
        description="Full URL of the instruction document, e.g. https://storage.yandexcloud.net/<bucket>/<key>.",
    )
    region: str = Field("ru-central1", validation_alias="S3_REGION")
    service: str = Field("s3", validation_alias="S3_SERVICE")


class AppSettings(BaseSettings):
    """Root settings object for the webhook application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    http_timeout_seconds: Optional[float] = Field(
        None,
        validation_alias="HTTP_TIMEOUT_SECONDS",
        description="Timeout for outbound HTTP calls. Unset means wait indefinitely.",
    )
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    vision: VisionSettings = Field(default_factory=VisionSettings)
    completion: CompletionSettings = Field(default_factory=CompletionSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @field_validator("http_timeout_seconds", mode="before")
    @classmethod
    def _blank_timeout_is_none(cls, value: object) -> object:
        """Treat an empty HTTP_TIMEOUT_SECONDS as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "CompletionSettings",
    "StorageSettings",
    "TelegramSettings",
    "VisionSettings",
    "get_settings",
]
