"""
app/flow/handlers/registration.py

Handles: /start and role selection

- Welcomes back registered users with the main menu
- Asks new users for their role
- Appends the Users row once a role is chosen
"""

from typing import Any, Dict, List

from app.flow.context import BotContext
from app.flow.states import UserRole
from app.schemas.webhook import InboundEvent
from app.services.user_service import get_user_by_chat_id, create_user
from app.core.logging import get_logger, LogContext
from utils.constants import (
    CB_REGISTER_ROLE_PREFIX,
    ROLE_PROMPT_MESSAGE,
    WELCOME_BACK_MESSAGE,
    REGISTRATION_STARTED_MESSAGE,
    HELP_MESSAGE,
    GENERIC_ERROR_MESSAGE,
)
from utils.telegram_utils import (
    create_text_message,
    escape_markdown,
    role_selection_keyboard,
    main_menu_keyboard,
)

logger = get_logger(__name__)


def welcome_back(name: str) -> List[Dict[str, Any]]:
    return [
        create_text_message(WELCOME_BACK_MESSAGE.format(name=name), parse_mode=None),
        create_text_message(HELP_MESSAGE, reply_markup=main_menu_keyboard()),
    ]


async def handle_start(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    """
    Handles /start.

    Existing users (any status) get a welcome back; no row is ever appended here.
    """
    with LogContext(chat_id=event.chat_id, intent="REGISTER"):
        user = await get_user_by_chat_id(ctx.sheets, event.chat_id)

        if user is not None:
            logger.info(f"Returning user at row {user.row_number}")
            return welcome_back(user.record.name or event.sender.greeting_name)

        logger.info("New chat, asking for role")
        return [
            create_text_message(
                ROLE_PROMPT_MESSAGE.format(name=escape_markdown(event.sender.greeting_name)),
                reply_markup=role_selection_keyboard()
            )
        ]


async def handle_role_selection(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    """
    Handles cb_register_role_<role>.

    The lookup is repeated so a second tap never creates a duplicate row.
    """
    with LogContext(chat_id=event.chat_id, intent="ROLE_SELECTED"):
        role = UserRole.parse(event.data[len(CB_REGISTER_ROLE_PREFIX):])
        if role is None:
            logger.warning(f"Unknown role in callback: {event.data}")
            return [create_text_message(GENERIC_ERROR_MESSAGE, parse_mode=None)]

        existing = await get_user_by_chat_id(ctx.sheets, event.chat_id)
        if existing is not None:
            logger.info("Role selected by an already registered chat")
            return welcome_back(existing.record.name or event.sender.greeting_name)

        await create_user(
            ctx.sheets,
            chat_id=event.chat_id,
            display_name=event.sender.display_name,
            role=role,
            language=ctx.settings.DEFAULT_LANGUAGE
        )

        return [create_text_message(REGISTRATION_STARTED_MESSAGE.format(role=role.value))]
