try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from urllib.parse import parse_qs

import httpx
import pytest

from exam_assistant.clients import TelegramBotClient
from exam_assistant.core.config import TelegramSettings
from exam_assistant.core.errors import TelegramFileError

pytestmark = pytest.mark.anyio


def _client(handler) -> TelegramBotClient:
    return TelegramBotClient(
        TelegramSettings(TG_BOT_KEY="123:abc"), transport=httpx.MockTransport(handler)
    )


async def test_send_message_posts_form() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True, "result": {}})

    await _client(handler).send_message(42, "Привет")

    request = seen[0]
    assert str(request.url) == "https://api.telegram.org/bot123:abc/sendMessage"
    assert parse_qs(request.content.decode("utf-8")) == {
        "chat_id": ["42"],
        "text": ["Привет"],
    }


async def test_send_message_failure_is_logged_not_raised(caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    await _client(handler).send_message(42, "hello")

    assert "sendMessage failed" in caplog.text
    assert "123:abc" not in caplog.text


async def test_get_file_path_and_download() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/bot123:abc/getFile":
            assert request.url.params["file_id"] == "photo-id"
            return httpx.Response(
                200, json={"ok": True, "result": {"file_id": "photo-id", "file_path": "photos/file_1.jpg"}}
            )
        if request.url.path == "/file/bot123:abc/photos/file_1.jpg":
            return httpx.Response(200, content=b"\xff\xd8jpeg")
        return httpx.Response(404)

    client = _client(handler)
    file_path = await client.get_file_path("photo-id")
    content = await client.download_file(file_path)

    assert file_path == "photos/file_1.jpg"
    assert content == b"\xff\xd8jpeg"


async def test_get_file_path_not_ok_fails() -> None:
    client = _client(
        lambda request: httpx.Response(200, json={"ok": False, "description": "file is too big"})
    )

    with pytest.raises(TelegramFileError, match="file is too big"):
        await client.get_file_path("photo-id")


async def test_download_non_200_fails() -> None:
    client = _client(lambda request: httpx.Response(404))

    with pytest.raises(TelegramFileError):
        await client.download_file("photos/missing.jpg")
