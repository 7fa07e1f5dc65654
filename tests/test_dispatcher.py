import pytest

from app.flow import dispatcher
from app.flow.dispatcher import Intent, classify_text, classify_callback, dispatch_event
from app.core.exceptions import UnexpectedError
from app.schemas.webhook import InboundEvent, Sender
from utils.constants import GENERIC_ERROR_MESSAGE, UNKNOWN_COMMAND_MESSAGE


CANONICAL_COMMANDS = {
    "/start": Intent.REGISTER,
    "help": Intent.HELP,
    "/help": Intent.HELP,
    "my profile details asha / 1234": Intent.PROFILE_UPDATE,
    "book bus": Intent.BUS_SEARCH,
    "/book": Intent.BUS_SEARCH,
    "show seats bus101": Intent.SEAT_MAP,
    "book seat bus101 3a": Intent.SEAT_SELECTION,
    "/language": Intent.LANGUAGE_MENU,
    "language": Intent.LANGUAGE_MENU,
    "status": Intent.SYSTEM_STATUS,
    "/status": Intent.SYSTEM_STATUS,
    "my booking": Intent.BOOKING_INFO,
    "my tickets": Intent.BOOKING_INFO,
    "cancel booking book123": Intent.CANCELLATION,
    "my profile": Intent.PROFILE_VIEW,
    "/profile": Intent.PROFILE_VIEW,
    "live tracking bus101": Intent.LIVE_TRACKING,
    "hello": Intent.GREETING,
    "hi": Intent.GREETING,
    "hey": Intent.GREETING,
}


@pytest.mark.parametrize("command,intent", CANONICAL_COMMANDS.items())
def test_canonical_commands(command, intent):
    assert classify_text(command) is intent


@pytest.mark.parametrize("command", CANONICAL_COMMANDS.keys())
def test_casing_and_whitespace_do_not_change_routing(command):
    variants = [command.upper(), command.title(), f"  {command}\n", f"\t{command.swapcase()}  "]

    for variant in variants:
        assert classify_text(variant) is classify_text(command)


def test_profile_details_wins_over_profile_view():
    assert classify_text("My Profile Details x / y") is Intent.PROFILE_UPDATE
    assert classify_text("my profile") is Intent.PROFILE_VIEW


@pytest.mark.parametrize("text", ["", "book", "hello there", "start", "show", "my profiles"])
def test_unrecognised_text_is_unknown(text):
    assert classify_text(text) is Intent.UNKNOWN


@pytest.mark.parametrize("data,intent", [
    ("cb_register_role_user", Intent.ROLE_SELECTED),
    ("cb_register_role_owner", Intent.ROLE_SELECTED),
    ("cb_book_bus", Intent.BUS_SEARCH),
    ("cb_my_booking", Intent.BOOKING_INFO),
    ("cb_my_profile", Intent.PROFILE_VIEW),
    ("cb_help", Intent.HELP),
    ("cb_status", Intent.SYSTEM_STATUS),
    ("lang_en", Intent.SET_LANGUAGE),
    ("cb_something_else", Intent.UNKNOWN),
    ("", Intent.UNKNOWN),
])
def test_classify_callback(data, intent):
    assert classify_callback(data) is intent


def callback_event(data, message_id=42):
    return InboundEvent(
        kind="callback",
        chat_id="777",
        sender=Sender(id=777, first_name="Asha"),
        data=data,
        callback_id="cbq-1",
        message_id=message_id,
    )


@pytest.mark.asyncio
async def test_callback_protocol_runs_before_handler(ctx, telegram):
    await dispatch_event(callback_event("cb_help"), ctx)

    assert telegram.methods == [
        "answerCallbackQuery",
        "editMessageReplyMarkup",
        "sendChatAction",
        "sendMessage",
    ]
    _, edit = telegram.calls[1]
    assert edit["message_id"] == 42
    assert edit["reply_markup"] is None


@pytest.mark.asyncio
async def test_callback_protocol_precedes_failing_handler(ctx, telegram, monkeypatch):
    seen_before_handler = []

    async def exploding_handler(ctx, event):
        seen_before_handler.extend(telegram.methods)
        raise RuntimeError("secret internal detail")

    monkeypatch.setitem(dispatcher.INTENT_HANDLERS, Intent.HELP, exploding_handler)

    await dispatch_event(callback_event("cb_help"), ctx)

    assert seen_before_handler.count("answerCallbackQuery") == 1
    assert seen_before_handler.count("editMessageReplyMarkup") == 1
    assert telegram.texts == [GENERIC_ERROR_MESSAGE]
    assert "secret" not in telegram.texts[0]


@pytest.mark.asyncio
async def test_side_effect_failures_do_not_abort_handler(ctx, telegram):
    telegram.fail_methods = {"answerCallbackQuery", "editMessageReplyMarkup", "sendChatAction"}

    await dispatch_event(callback_event("cb_help"), ctx)

    assert telegram.methods[-1] == "sendMessage"
    assert "Help Center" in telegram.texts[0]


@pytest.mark.asyncio
async def test_text_event_shows_typing_then_replies(ctx, telegram):
    event = InboundEvent(kind="text", chat_id="777", sender=Sender(first_name="Asha"), text="what?")

    result = await dispatch_event(event, ctx)

    assert result["intent"] == "UNKNOWN"
    assert telegram.methods == ["sendChatAction", "sendMessage"]
    assert telegram.texts == [UNKNOWN_COMMAND_MESSAGE]


@pytest.mark.asyncio
async def test_greeting_uses_first_name(ctx, telegram):
    event = InboundEvent(kind="text", chat_id="777", sender=Sender(first_name="Asha"), text=" Hi ")

    await dispatch_event(event, ctx)

    assert telegram.texts == ["👋 Asha!"]


@pytest.mark.asyncio
async def test_uncategorized_failures_become_unexpected_error(ctx, monkeypatch):
    seen = []

    async def exploding_handler(ctx, event):
        raise KeyError("row")

    def record_message(exc):
        seen.append(exc)
        return GENERIC_ERROR_MESSAGE

    monkeypatch.setitem(dispatcher.INTENT_HANDLERS, Intent.HELP, exploding_handler)
    monkeypatch.setattr(dispatcher, "user_message_for", record_message)

    replies = await dispatcher.route_to_handler(Intent.HELP, callback_event("cb_help"), ctx)

    assert isinstance(seen[0], UnexpectedError)
    assert replies[0]["message"] == GENERIC_ERROR_MESSAGE
