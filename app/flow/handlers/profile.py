"""
app/flow/handlers/profile.py

Handles: profile view, profile details submission, language choice

- Parses "my profile details <name> / <aadhar>"
- Activates the user and shows the updated profile
- Renders profile fields with "Not set" fallbacks
"""

from typing import Any, Dict, List

from app.flow.context import BotContext
from app.flow.states import RegistrationState
from app.models.user import UserRecord
from app.schemas.webhook import InboundEvent
from app.services.user_service import require_user, complete_profile, update_language
from app.core.logging import get_logger, LogContext
from utils.constants import (
    CB_LANGUAGE_PREFIX,
    NOT_SET,
    PROFILE_TEMPLATE,
    PROFILE_PENDING_REMINDER,
    PROFILE_UPDATED_MESSAGE,
    LANGUAGE_UPDATED_MESSAGE,
    SUPPORTED_LANGUAGES,
    FEATURE_WIP_MESSAGE,
)
from utils.telegram_utils import create_text_message, escape_markdown
from utils.time_utils import format_join_date
from utils.validation_utils import parse_profile_details

logger = get_logger(__name__)


def render_profile(record: UserRecord) -> str:
    """Profile card text; appends a reminder while details are pending."""
    def field(value: str) -> str:
        return escape_markdown(value) if value else NOT_SET

    text = PROFILE_TEMPLATE.format(
        user_id=field(record.user_id),
        name=field(record.name),
        phone=field(record.phone),
        aadhar=field(record.aadhar),
        status=field(record.status),
        role=field(record.role),
        language=field(record.language),
        joined=field(format_join_date(record.joined)),
    )

    if RegistrationState.from_status(record.status) is RegistrationState.PENDING_DETAILS:
        text += PROFILE_PENDING_REMINDER

    return text


async def handle_profile_view(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    with LogContext(chat_id=event.chat_id, intent="PROFILE_VIEW"):
        user = await require_user(ctx.sheets, event.chat_id)
        return [create_text_message(render_profile(user.record))]


async def handle_profile_update(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    """
    Handles "my profile details <name> / <aadhar>".

    The text is validated before the store is touched.
    """
    with LogContext(chat_id=event.chat_id, intent="PROFILE_UPDATE"):
        name, aadhar = parse_profile_details(event.text)
        record = await complete_profile(ctx.sheets, event.chat_id, name, aadhar)

        return [
            create_text_message(PROFILE_UPDATED_MESSAGE),
            create_text_message(render_profile(record)),
        ]


async def handle_set_language(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    """
    Handles lang_<code>. Only English texts exist; the choice is still stored.
    """
    with LogContext(chat_id=event.chat_id, intent="SET_LANGUAGE"):
        code = event.data[len(CB_LANGUAGE_PREFIX):].strip().lower()
        label = SUPPORTED_LANGUAGES.get(code)

        if label is None:
            logger.warning(f"Unsupported language requested: {code}")
            return [create_text_message(FEATURE_WIP_MESSAGE)]

        await update_language(ctx.sheets, event.chat_id, code)
        return [create_text_message(LANGUAGE_UPDATED_MESSAGE.format(language=label))]
