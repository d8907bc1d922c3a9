"""Classify Telegram updates and orchestrate OCR, instruction and completion calls."""

from __future__ import annotations

import base64
import logging
from typing import Protocol

from exam_assistant.core.errors import TextNotFoundError
from exam_assistant.schemas.telegram import TelegramUpdate

logger = logging.getLogger(__name__)


MSG_HELP = (
    "Я помогу подготовить ответ на экзаменационный вопрос по дисциплине Операционные системы.\n"
    "Пришлите мне фотографию с вопросом или наберите его текстом."
)
MSG_CANT_ANSWER = "Я не смог подготовить ответ на экзаменационный вопрос."
MSG_CANT_PROCESS_PHOTO = "Я не могу обработать эту фотографию."
MSG_UNSUPPORTED_INPUT = "Я могу обработать только текстовое сообщение или фотографию."

HELP_COMMANDS = frozenset({"/start", "/help"})


class Messenger(Protocol):
    async def send_message(self, chat_id: int, text: str) -> None: ...

    async def get_file_path(self, file_id: str) -> str: ...

    async def download_file(self, file_path: str) -> bytes: ...


class RecognitionService(Protocol):
    async def recognize(self, image_base64: str) -> str: ...


class InstructionSource(Protocol):
    async def fetch(self, path: str | None = None) -> str: ...


class CompletionService(Protocol):
    async def complete(self, system_prompt: str, question: str) -> str: ...


class UpdateDispatcher:
    """Route one update to a single reply.

    Every downstream failure is logged with the chat id and the failing stage,
    then answered with a static fallback message. Nothing propagates to the
    caller.
    """

    def __init__(
        self,
        *,
        messenger: Messenger,
        recognizer: RecognitionService,
        instructions: InstructionSource,
        completion: CompletionService,
    ) -> None:
        self._messenger = messenger
        self._recognizer = recognizer
        self._instructions = instructions
        self._completion = completion

    async def handle(self, update: TelegramUpdate) -> None:
        message = update.message
        if message is None:
            logger.info("update_id=%s carries no message, ignoring", update.update_id)
            return
        chat_id = message.chat.id

        if message.text in HELP_COMMANDS:
            logger.info("chat_id=%s help requested", chat_id)
            await self._messenger.send_message(chat_id, MSG_HELP)
        elif message.text:
            logger.info("chat_id=%s text question received", chat_id)
            await self.answer_text(chat_id, message.text)
        elif message.largest_photo is not None:
            logger.info(
                "chat_id=%s photo received (%d variants)", chat_id, len(message.photo)
            )
            await self.answer_photo(chat_id, message.largest_photo.file_id)
        else:
            logger.info("chat_id=%s unsupported update", chat_id)
            await self._messenger.send_message(chat_id, MSG_UNSUPPORTED_INPUT)

    async def answer_text(self, chat_id: int, question: str) -> None:
        """Answer ``question``; the instruction must be fetched before completing."""
        stage = "instruction"
        try:
            instruction = await self._instructions.fetch()
            stage = "completion"
            answer = await self._completion.complete(instruction, question)
        except Exception:
            logger.warning(
                "chat_id=%s stage=%s failed to prepare answer",
                chat_id,
                stage,
                exc_info=True,
            )
            await self._messenger.send_message(chat_id, MSG_CANT_ANSWER)
            return

        await self._messenger.send_message(chat_id, answer)

    async def answer_photo(self, chat_id: int, file_id: str) -> None:
        """Recognize the question on a photo and answer it as typed text."""
        stage = "file_info"
        try:
            file_path = await self._messenger.get_file_path(file_id)
            stage = "download"
            content = await self._messenger.download_file(file_path)
            stage = "recognition"
            image_base64 = base64.b64encode(content).decode("ascii")
            recognized = await self._recognizer.recognize(image_base64)
            if not recognized.strip():
                raise TextNotFoundError("no text found")
        except Exception:
            logger.warning(
                "chat_id=%s file_id=%s stage=%s failed to process photo",
                chat_id,
                file_id,
                stage,
                exc_info=True,
            )
            await self._messenger.send_message(chat_id, MSG_CANT_PROCESS_PHOTO)
            return

        await self.answer_text(chat_id, recognized)


__all__ = [
    "CompletionService",
    "HELP_COMMANDS",
    "InstructionSource",
    "MSG_CANT_ANSWER",
    "MSG_CANT_PROCESS_PHOTO",
    "MSG_HELP",
    "MSG_UNSUPPORTED_INPUT",
    "Messenger",
    "RecognitionService",
    "UpdateDispatcher",
]
