import json

import httpx
import pytest

from app.services.telegram_service import TelegramService


def service_with(settings, handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TelegramService(settings, http_client=client)


@pytest.mark.asyncio
async def test_send_message_posts_to_bot_endpoint(settings):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})

    service = service_with(settings, handler)
    keyboard = {"inline_keyboard": [[{"text": "Help", "callback_data": "cb_help"}]]}

    result = await service.send_message("777", "hi", parse_mode="Markdown", reply_markup=keyboard)

    assert result == {"success": True, "result": {"message_id": 1}}
    assert seen[0].url.path == "/bot123:ABC/sendMessage"
    body = json.loads(seen[0].content)
    assert body == {"chat_id": "777", "text": "hi", "parse_mode": "Markdown", "reply_markup": keyboard}


@pytest.mark.asyncio
async def test_plain_message_omits_optional_fields(settings):
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"ok": True, "result": {}})

    await service_with(settings, handler).send_message("777", "plain")

    assert seen == [{"chat_id": "777", "text": "plain"}]


@pytest.mark.asyncio
async def test_not_modified_rejection_is_flagged(settings):
    def handler(request):
        return httpx.Response(400, json={
            "ok": False,
            "description": "Bad Request: message is not modified: specified new message content",
        })

    result = await service_with(settings, handler).edit_message_reply_markup("777", 5)

    assert result["success"] is False
    assert result["not_modified"] is True


@pytest.mark.asyncio
async def test_other_edit_failures_are_reported(settings):
    def handler(request):
        return httpx.Response(400, json={"ok": False, "description": "Bad Request: message to edit not found"})

    result = await service_with(settings, handler).edit_message_reply_markup("777", 5)

    assert result["success"] is False
    assert result["status_code"] == 400
    assert "not_modified" not in result


@pytest.mark.asyncio
async def test_transport_errors_do_not_raise(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused")

    result = await service_with(settings, handler).send_chat_action("777")

    assert result["success"] is False
    assert "connection refused" in result["error"]


@pytest.mark.asyncio
async def test_non_json_error_body(settings):
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    result = await service_with(settings, handler).answer_callback_query("cbq")

    assert result == {"success": False, "status_code": 502, "error": "Bad Gateway"}
