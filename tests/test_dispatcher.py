try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import base64

import httpx
import pytest

from exam_assistant.clients import VisionOCRClient
from exam_assistant.core.config import VisionSettings
from exam_assistant.core.errors import (
    InstructionFetchError,
    InstructionPathError,
    NoAlternativesError,
    TelegramFileError,
    TextNotFoundError,
)
from exam_assistant.schemas import TelegramUpdate
from exam_assistant.services.dispatcher import (
    MSG_CANT_ANSWER,
    MSG_CANT_PROCESS_PHOTO,
    MSG_HELP,
    MSG_UNSUPPORTED_INPUT,
    UpdateDispatcher,
)

pytestmark = pytest.mark.anyio


class RecordingMessenger:
    def __init__(self) -> None:
        self.sent: list[tuple[int, str]] = []
        self.file_requests: list[str] = []
        self.downloads: list[str] = []
        self.file_error: Exception | None = None
        self.download_error: Exception | None = None

    async def send_message(self, chat_id: int, text: str) -> None:
        self.sent.append((chat_id, text))

    async def get_file_path(self, file_id: str) -> str:
        self.file_requests.append(file_id)
        if self.file_error:
            raise self.file_error
        return f"photos/{file_id}.jpg"

    async def download_file(self, file_path: str) -> bytes:
        self.downloads.append(file_path)
        if self.download_error:
            raise self.download_error
        return b"image-bytes"


class StubRecognizer:
    def __init__(self, text: str = "What is a deadlock?\n") -> None:
        self.text = text
        self.error: Exception | None = None
        self.calls: list[str] = []

    async def recognize(self, image_base64: str) -> str:
        self.calls.append(image_base64)
        if self.error:
            raise self.error
        return self.text


class StubInstructions:
    def __init__(self, text: str = "You are an OS tutor.") -> None:
        self.text = text
        self.error: Exception | None = None
        self.calls = 0

    async def fetch(self, path: str | None = None) -> str:
        self.calls += 1
        if self.error:
            raise self.error
        return self.text


class StubCompletion:
    def __init__(self, answer: str = "A deadlock is a circular wait.") -> None:
        self.answer = answer
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, question: str) -> str:
        self.calls.append((system_prompt, question))
        if self.error:
            raise self.error
        return self.answer


@pytest.fixture()
def parts():
    return RecordingMessenger(), StubRecognizer(), StubInstructions(), StubCompletion()


@pytest.fixture()
def dispatcher(parts) -> UpdateDispatcher:
    messenger, recognizer, instructions, completion = parts
    return UpdateDispatcher(
        messenger=messenger,
        recognizer=recognizer,
        instructions=instructions,
        completion=completion,
    )


def _update(**message) -> TelegramUpdate:
    message.setdefault("chat", {"id": 7})
    return TelegramUpdate.model_validate({"update_id": 1, "message": message})


@pytest.mark.parametrize("command", ["/start", "/help"])
async def test_help_commands_reply_with_help(parts, dispatcher, command) -> None:
    messenger, recognizer, instructions, completion = parts

    await dispatcher.handle(_update(text=command, photo=[{"file_id": "ignored"}]))

    assert messenger.sent == [(7, MSG_HELP)]
    assert instructions.calls == 0
    assert completion.calls == []
    assert messenger.file_requests == []


async def test_text_question_is_answered_verbatim(parts, dispatcher) -> None:
    messenger, _, instructions, completion = parts

    await dispatcher.handle(_update(text="What is a deadlock?"))

    assert completion.calls == [("You are an OS tutor.", "What is a deadlock?")]
    assert instructions.calls == 1
    assert messenger.sent == [(7, "A deadlock is a circular wait.")]


async def test_instruction_is_fetched_for_every_question(parts, dispatcher) -> None:
    messenger, _, instructions, _ = parts

    await dispatcher.handle(_update(text="first"))
    await dispatcher.handle(_update(text="second"))

    assert instructions.calls == 2
    assert len(messenger.sent) == 2


async def test_text_takes_priority_over_photo(parts, dispatcher) -> None:
    messenger, recognizer, _, completion = parts

    await dispatcher.handle(_update(text="typed", photo=[{"file_id": "p"}]))

    assert completion.calls[0][1] == "typed"
    assert recognizer.calls == []
    assert messenger.file_requests == []


@pytest.mark.parametrize(
    "error", [InstructionFetchError("403"), InstructionPathError("bad path")]
)
async def test_instruction_failure_skips_completion(parts, dispatcher, error) -> None:
    messenger, _, instructions, completion = parts
    instructions.error = error

    await dispatcher.handle(_update(text="What is a deadlock?"))

    assert completion.calls == []
    assert messenger.sent == [(7, MSG_CANT_ANSWER)]


@pytest.mark.parametrize("error", [NoAlternativesError("can't answer"), RuntimeError("boom")])
async def test_completion_failure_sends_fallback(parts, dispatcher, error, caplog) -> None:
    messenger, _, _, completion = parts
    completion.error = error

    await dispatcher.handle(_update(text="What is a deadlock?"))

    assert messenger.sent == [(7, MSG_CANT_ANSWER)]
    assert "chat_id=7 stage=completion" in caplog.text


async def test_photo_uses_last_variant_and_feeds_text_path(parts, dispatcher) -> None:
    messenger, recognizer, _, completion = parts

    await dispatcher.handle(
        _update(photo=[{"file_id": "small"}, {"file_id": "medium"}, {"file_id": "large"}])
    )

    assert messenger.file_requests == ["large"]
    assert messenger.downloads == ["photos/large.jpg"]
    assert recognizer.calls == [base64.b64encode(b"image-bytes").decode("ascii")]
    assert completion.calls == [("You are an OS tutor.", "What is a deadlock?\n")]
    assert messenger.sent == [(7, "A deadlock is a circular wait.")]


async def test_photo_without_text_skips_completion(parts, dispatcher) -> None:
    messenger, recognizer, instructions, completion = parts
    recognizer.error = TextNotFoundError("no text found")

    await dispatcher.handle(_update(photo=[{"file_id": "X"}]))

    assert messenger.sent == [(7, MSG_CANT_PROCESS_PHOTO)]
    assert completion.calls == []
    assert instructions.calls == 0


@pytest.mark.parametrize("recognized", ["", "\n\n", "  \n"])
async def test_blank_recognized_text_is_not_answered(
    parts, dispatcher, recognized, caplog
) -> None:
    messenger, recognizer, instructions, completion = parts
    recognizer.text = recognized

    await dispatcher.handle(_update(photo=[{"file_id": "X"}]))

    assert messenger.sent == [(7, MSG_CANT_PROCESS_PHOTO)]
    assert completion.calls == []
    assert instructions.calls == 0
    assert "stage=recognition" in caplog.text


async def test_ocr_blocks_without_lines_get_photo_fallback(parts) -> None:
    messenger, _, instructions, completion = parts
    ocr_payload = {"result": {"textAnnotation": {"blocks": [{"lines": []}]}}}
    recognizer = VisionOCRClient(
        VisionSettings(VISION_API_KEY="vision-key"),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=ocr_payload)),
    )
    dispatcher = UpdateDispatcher(
        messenger=messenger,
        recognizer=recognizer,
        instructions=instructions,
        completion=completion,
    )

    await dispatcher.handle(_update(photo=[{"file_id": "X"}]))

    assert completion.calls == []
    assert messenger.sent == [(7, MSG_CANT_PROCESS_PHOTO)]
    assert instructions.calls == 0


@pytest.mark.parametrize("stage", ["file_info", "download"])
async def test_photo_transfer_failure_sends_photo_fallback(parts, dispatcher, stage, caplog) -> None:
    messenger, recognizer, _, completion = parts
    if stage == "file_info":
        messenger.file_error = TelegramFileError("not ok")
    else:
        messenger.download_error = TelegramFileError("404")

    await dispatcher.handle(_update(photo=[{"file_id": "X"}]))

    assert messenger.sent == [(7, MSG_CANT_PROCESS_PHOTO)]
    assert recognizer.calls == []
    assert completion.calls == []
    assert f"stage={stage}" in caplog.text


async def test_recognized_question_can_still_fail_completion(parts, dispatcher) -> None:
    messenger, _, _, completion = parts
    completion.error = NoAlternativesError("can't answer")

    await dispatcher.handle(_update(photo=[{"file_id": "X"}]))

    assert messenger.sent == [(7, MSG_CANT_ANSWER)]


async def test_unsupported_update(parts, dispatcher) -> None:
    messenger, recognizer, instructions, completion = parts

    await dispatcher.handle(_update(sticker={"file_id": "s"}))

    assert messenger.sent == [(7, MSG_UNSUPPORTED_INPUT)]
    assert recognizer.calls == []
    assert instructions.calls == 0
    assert completion.calls == []


async def test_update_without_message_is_ignored(parts, dispatcher) -> None:
    messenger, *_ = parts

    await dispatcher.handle(TelegramUpdate.model_validate({"update_id": 3}))

    assert messenger.sent == []
