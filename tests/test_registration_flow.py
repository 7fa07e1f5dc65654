import json

import pytest

from app.flow.dispatcher import dispatch_event
from app.schemas.webhook import InboundEvent, Sender
from utils.constants import (
    INVALID_PROFILE_FORMAT_MESSAGE,
    USER_NOT_FOUND_MESSAGE,
    STORE_ACCESS_ERROR_MESSAGE,
    HELP_MESSAGE,
)
from conftest import user_row


def text_event(text, chat_id="777"):
    return InboundEvent(kind="text", chat_id=chat_id, sender=Sender(id=int(chat_id), first_name="Asha", last_name="Rao"), text=text)


def role_event(role, chat_id="777"):
    return InboundEvent(
        kind="callback",
        chat_id=chat_id,
        sender=Sender(id=int(chat_id), first_name="Asha", last_name="Rao"),
        data=f"cb_register_role_{role}",
        callback_id="cbq",
        message_id=10,
    )


@pytest.mark.asyncio
async def test_start_for_new_chat_asks_for_role(ctx, telegram, backend):
    await dispatch_event(text_event("/start"), ctx)

    _, sent = telegram.calls[-1]
    buttons = [row[0]["callback_data"] for row in sent["reply_markup"]["inline_keyboard"]]
    assert buttons == ["cb_register_role_user", "cb_register_role_manager", "cb_register_role_owner"]
    assert backend.writes == []


@pytest.mark.asyncio
async def test_role_selection_appends_pending_row(ctx, telegram, backend):
    await dispatch_event(role_event("manager"), ctx)

    rows = backend.tables["Users"]
    assert len(rows) == 2
    user_id, name, chat_id, phone, aadhar, status, role, lang, joined = rows[1]
    assert user_id.startswith("USER") and user_id[4:].isdigit()
    assert name == "Asha Rao"
    assert chat_id == "777"
    assert status == "pending_details"
    assert role == "manager"
    assert lang == "en"
    assert joined.endswith("Z")
    assert "my profile details" in telegram.texts[-1]


@pytest.mark.asyncio
async def test_repeated_start_never_appends(ctx, telegram, backend):
    backend.tables["Users"].append(user_row(777, name="Asha Rao"))

    await dispatch_event(text_event("/start"), ctx)
    await dispatch_event(text_event("  /START "), ctx)

    assert len(backend.tables["Users"]) == 2
    assert backend.writes == []
    assert telegram.texts.count(HELP_MESSAGE) == 2
    assert telegram.texts[0].startswith("👋 Welcome back, Asha Rao!")


@pytest.mark.asyncio
async def test_second_role_tap_does_not_duplicate_row(ctx, telegram, backend):
    await dispatch_event(role_event("user"), ctx)
    await dispatch_event(role_event("owner"), ctx)

    assert len(backend.tables["Users"]) == 2
    assert backend.tables["Users"][1][6] == "user"


@pytest.mark.asyncio
async def test_profile_update_writes_exactly_three_cells(ctx, telegram, backend):
    backend.tables["Users"].extend([user_row(111), user_row(777, name="Asha")])

    await dispatch_event(text_event("my profile details Asha Rao / 1234 5678 9012"), ctx)

    assert len(backend.writes) == 1
    ranges = {item["range"]: item["values"][0][0] for item in json.loads(backend.writes[0].content)["data"]}
    assert ranges == {
        "Users!B3": "Asha Rao",
        "Users!E3": "1234 5678 9012",
        "Users!F3": "active",
    }
    assert backend.tables["Users"][2][5] == "active"
    assert "Profile updated" in telegram.texts[0]
    assert "Asha Rao" in telegram.texts[1]
    assert "incomplete" not in telegram.texts[1]


@pytest.mark.asyncio
async def test_profile_update_with_bad_format_touches_nothing(ctx, telegram, backend):
    backend.tables["Users"].append(user_row(777))

    await dispatch_event(text_event("my profile details OnlyName"), ctx)

    assert backend.requests == []
    assert telegram.texts == [INVALID_PROFILE_FORMAT_MESSAGE]


@pytest.mark.asyncio
async def test_profile_update_for_unregistered_chat(ctx, telegram, backend):
    await dispatch_event(text_event("my profile details Asha / 1234"), ctx)

    assert backend.writes == []
    assert telegram.texts == [USER_NOT_FOUND_MESSAGE]


@pytest.mark.asyncio
async def test_profile_view_shows_fallbacks_and_reminder(ctx, telegram, backend):
    backend.tables["Users"].append(["USER1", "", "777", "", "", "pending_details", "user"])

    await dispatch_event(text_event("My Profile"), ctx)

    profile = telegram.texts[0]
    assert "Name: Not set" in profile
    assert "Aadhar: Not set" in profile
    assert "Language: Not set" in profile
    assert "pending\\_details" in profile
    assert "incomplete" in profile


@pytest.mark.asyncio
async def test_profile_view_for_active_user(ctx, telegram, backend):
    backend.tables["Users"].append(user_row(777, name="Asha Rao", status="active", aadhar="1234"))

    await dispatch_event(text_event("/profile"), ctx)

    profile = telegram.texts[0]
    assert "Name: Asha Rao" in profile
    assert "Joined: 2024-03-20" in profile
    assert "incomplete" not in profile


@pytest.mark.asyncio
async def test_language_callback_updates_lang_cell(ctx, telegram, backend):
    row = user_row(777)
    row[7] = ""
    backend.tables["Users"].append(row)
    event = InboundEvent(kind="callback", chat_id="777", data="lang_en", callback_id="c", message_id=5)

    await dispatch_event(event, ctx)

    assert len(backend.writes) == 1
    assert backend.tables["Users"][1][7] == "en"
    assert "Language set" in telegram.texts[0]


@pytest.mark.asyncio
async def test_store_permission_error_maps_to_access_message(ctx, telegram, backend):
    backend.fail_with = 403

    await dispatch_event(text_event("my profile"), ctx)

    assert telegram.texts == [STORE_ACCESS_ERROR_MESSAGE]


@pytest.mark.asyncio
async def test_language_callback_for_unregistered_chat(ctx, telegram, backend):
    event = InboundEvent(kind="callback", chat_id="999", data="lang_en", callback_id="c", message_id=5)

    await dispatch_event(event, ctx)

    assert backend.writes == []
    assert telegram.texts == [USER_NOT_FOUND_MESSAGE]


@pytest.mark.asyncio
async def test_role_prompt_escapes_markdown_in_sender_name(ctx, telegram):
    event = InboundEvent(kind="text", chat_id="777", sender=Sender(id=777, first_name="john_doe*"), text="/start")

    await dispatch_event(event, ctx)

    _, sent = telegram.calls[-1]
    assert sent["parse_mode"] == "Markdown"
    assert "john\\_doe\\*" in sent["text"]


@pytest.mark.asyncio
async def test_profile_text_is_stored_as_literal_values(ctx, backend):
    backend.tables["Users"].append(user_row(777))

    await dispatch_event(text_event("my profile details =1+1 / +91 0123"), ctx)

    body = json.loads(backend.writes[0].content)
    assert body["valueInputOption"] == "RAW"
    assert backend.tables["Users"][1][1] == "=1+1"
    assert backend.tables["Users"][1][4] == "+91 0123"
