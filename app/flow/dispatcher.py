"""
app/flow/dispatcher.py

Purpose: Central message dispatcher

- Receives normalized events from the webhook
- Classifies text and callback data into an Intent
- Runs the callback protocol (answer, clear keyboard, typing)
- Routes to the intent's handler and sends its replies
- Turns handler failures into one user-facing message
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Tuple

from app.core.errors import user_message_for
from app.core.exceptions import GoRouteError, InvalidFormat, UnexpectedError
from app.core.logging import get_logger, LogContext
from app.flow.context import BotContext
from app.flow.handlers import booking, menu, profile, registration
from app.schemas.webhook import InboundEvent
from utils.telegram_utils import create_text_message
from utils.constants import (
    CB_REGISTER_ROLE_PREFIX,
    CB_BOOK_BUS,
    CB_MY_BOOKING,
    CB_MY_PROFILE,
    CB_HELP,
    CB_STATUS,
    CB_LANGUAGE_PREFIX,
)

logger = get_logger(__name__)

Handler = Callable[[BotContext, InboundEvent], Awaitable[List[Dict[str, Any]]]]


class Intent(str, Enum):
    REGISTER = "REGISTER"
    ROLE_SELECTED = "ROLE_SELECTED"
    HELP = "HELP"
    PROFILE_UPDATE = "PROFILE_UPDATE"
    BUS_SEARCH = "BUS_SEARCH"
    SEAT_MAP = "SEAT_MAP"
    SEAT_SELECTION = "SEAT_SELECTION"
    LANGUAGE_MENU = "LANGUAGE_MENU"
    SET_LANGUAGE = "SET_LANGUAGE"
    SYSTEM_STATUS = "SYSTEM_STATUS"
    BOOKING_INFO = "BOOKING_INFO"
    CANCELLATION = "CANCELLATION"
    PROFILE_VIEW = "PROFILE_VIEW"
    LIVE_TRACKING = "LIVE_TRACKING"
    GREETING = "GREETING"
    UNKNOWN = "UNKNOWN"


def _equals(*commands: str) -> Callable[[str], bool]:
    return lambda text: text in commands


def _starts_with(prefix: str) -> Callable[[str], bool]:
    return lambda text: text.startswith(prefix)


# Ordered, first match wins. "my profile details" must precede "my profile".
TEXT_ROUTES: List[Tuple[Callable[[str], bool], Intent]] = [
    (_equals("/start"), Intent.REGISTER),
    (_equals("help", "/help"), Intent.HELP),
    (_starts_with("my profile details"), Intent.PROFILE_UPDATE),
    (_equals("book bus", "/book"), Intent.BUS_SEARCH),
    (_starts_with("show seats"), Intent.SEAT_MAP),
    (_starts_with("book seat"), Intent.SEAT_SELECTION),
    (_equals("/language", "language"), Intent.LANGUAGE_MENU),
    (_equals("status", "/status"), Intent.SYSTEM_STATUS),
    (_equals("my booking", "my tickets"), Intent.BOOKING_INFO),
    (_starts_with("cancel booking"), Intent.CANCELLATION),
    (_equals("my profile", "/profile"), Intent.PROFILE_VIEW),
    (_starts_with("live tracking"), Intent.LIVE_TRACKING),
    (_equals("hello", "hi", "hey"), Intent.GREETING),
]

CALLBACK_ROUTES: Dict[str, Intent] = {
    CB_BOOK_BUS: Intent.BUS_SEARCH,
    CB_MY_BOOKING: Intent.BOOKING_INFO,
    CB_MY_PROFILE: Intent.PROFILE_VIEW,
    CB_HELP: Intent.HELP,
    CB_STATUS: Intent.SYSTEM_STATUS,
}

INTENT_HANDLERS: Dict[Intent, Handler] = {
    Intent.REGISTER: registration.handle_start,
    Intent.ROLE_SELECTED: registration.handle_role_selection,
    Intent.HELP: menu.handle_help,
    Intent.PROFILE_UPDATE: profile.handle_profile_update,
    Intent.BUS_SEARCH: booking.handle_bus_search,
    Intent.SEAT_MAP: booking.handle_seat_map,
    Intent.SEAT_SELECTION: booking.handle_coming_soon,
    Intent.LANGUAGE_MENU: menu.handle_language_menu,
    Intent.SET_LANGUAGE: profile.handle_set_language,
    Intent.SYSTEM_STATUS: menu.handle_system_status,
    Intent.BOOKING_INFO: booking.handle_coming_soon,
    Intent.CANCELLATION: booking.handle_coming_soon,
    Intent.PROFILE_VIEW: profile.handle_profile_view,
    Intent.LIVE_TRACKING: booking.handle_coming_soon,
    Intent.GREETING: menu.handle_greeting,
    Intent.UNKNOWN: menu.handle_unknown,
}


def classify_text(text: str) -> Intent:
    """
    Classifies a text message. Casing and surrounding whitespace are ignored.
    """
    normalized = (text or "").strip().lower()
    for predicate, intent in TEXT_ROUTES:
        if predicate(normalized):
            return intent
    return Intent.UNKNOWN


def classify_callback(data: str) -> Intent:
    """
    Classifies callback data from an inline button.
    """
    data = (data or "").strip()
    if data.startswith(CB_REGISTER_ROLE_PREFIX):
        return Intent.ROLE_SELECTED
    if data.startswith(CB_LANGUAGE_PREFIX):
        return Intent.SET_LANGUAGE
    return CALLBACK_ROUTES.get(data, Intent.UNKNOWN)


def classify_event(event: InboundEvent) -> Intent:
    if event.kind == "callback":
        return classify_callback(event.data)
    return classify_text(event.text)


async def dispatch_event(event: InboundEvent, ctx: BotContext) -> Dict[str, Any]:
    """
    Main dispatcher for incoming Telegram events

    Args:
        event: Normalized inbound event
        ctx: Settings and service clients

    Returns:
        Status dict
    """
    intent = classify_event(event)

    with LogContext(chat_id=event.chat_id, intent=intent.value):
        logger.info(f"📨 Dispatching {event.kind} event")

        if event.kind == "callback":
            await run_callback_protocol(event, ctx)
        else:
            await _best_effort(ctx.telegram.send_chat_action(event.chat_id, "typing"), "typing indicator")

        response = await route_to_handler(intent, event, ctx)
        await send_response(event.chat_id, response, ctx)

        return {"status": "success", "intent": intent.value}


async def run_callback_protocol(event: InboundEvent, ctx: BotContext):
    """
    Answers the callback, strips the origin keyboard and shows typing.
    Each step is attempted regardless of the others' outcome.
    """
    if event.callback_id:
        await _best_effort(ctx.telegram.answer_callback_query(event.callback_id), "callback answer")

    if event.message_id is not None:
        await _best_effort(
            ctx.telegram.edit_message_reply_markup(event.chat_id, event.message_id, None),
            "keyboard clear"
        )

    await _best_effort(ctx.telegram.send_chat_action(event.chat_id, "typing"), "typing indicator")


async def _best_effort(call: Awaitable[Dict[str, Any]], label: str):
    try:
        await call
    except Exception as e:
        logger.warning(f"⚠️ {label} failed: {e}")


async def route_to_handler(intent: Intent, event: InboundEvent, ctx: BotContext) -> List[Dict[str, Any]]:
    """
    Runs the intent's handler.

    Failures become a single reply built from the error's category; raw
    error text never reaches the user.
    """
    handler = INTENT_HANDLERS.get(intent, menu.handle_unknown)

    try:
        logger.info(f"📞 Calling handler: {handler.__name__}")
        return await handler(ctx, event)

    except InvalidFormat as e:
        logger.info(f"Invalid profile format: {e.message}")
        return _error_reply(e)

    except GoRouteError as e:
        logger.error(f"❌ Handler error [{e.code}]: {e.message}")
        return _error_reply(e)

    except Exception as e:
        logger.error(f"❌ Unexpected handler error: {e}", exc_info=True)
        return _error_reply(UnexpectedError(str(e)))


def _error_reply(exc: Exception) -> List[Dict[str, Any]]:
    return [create_text_message(user_message_for(exc))]


async def send_response(chat_id: str, response: List[Dict[str, Any]], ctx: BotContext):
    """
    Sends handler replies in order.
    """
    for reply in response:
        text = reply.get("message", "")
        if not text:
            logger.warning("⚠️ Empty response message")
            continue

        await ctx.telegram.send_message(
            chat_id,
            text,
            parse_mode=reply.get("parse_mode"),
            reply_markup=reply.get("reply_markup")
        )
