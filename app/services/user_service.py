"""
app/services/user_service.py

Purpose: User record management

- Look up users by chat id (row re-resolved on every call)
- Create user rows on role selection
- Complete profile details and update language
"""

from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import UserNotFound
from app.core.logging import get_logger, LogContext
from app.flow.states import RegistrationState, UserRole, ensure_transition
from app.models.user import UserRecord, CHAT_ID_COLUMN, user_cell
from app.services.sheets_service import SheetsService, CellUpdate
from utils.constants import USERS_SHEET
from utils.time_utils import generate_user_id, iso_timestamp

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserLookup:
    """A user record together with the sheet row it was read from."""
    record: UserRecord
    row_number: int

    @property
    def state(self) -> RegistrationState:
        return RegistrationState.from_status(self.record.status)


async def get_user_by_chat_id(sheets: SheetsService, chat_id: str) -> Optional[UserLookup]:
    """
    Retrieves a user by chat id.

    Args:
        sheets: Store client
        chat_id: Telegram chat id

    Returns:
        UserLookup or None if no row matches
    """
    handle = await sheets.find_row_by_key(USERS_SHEET, CHAT_ID_COLUMN, chat_id)
    if handle is None:
        return None
    return UserLookup(record=UserRecord.from_row(handle.values), row_number=handle.row_number)


async def require_user(sheets: SheetsService, chat_id: str) -> UserLookup:
    """
    Like get_user_by_chat_id, but a missing row is an error.

    Raises:
        UserNotFound: If the chat has not registered
    """
    user = await get_user_by_chat_id(sheets, chat_id)
    if user is None:
        raise UserNotFound(f"No user row for chat {chat_id}")
    return user


async def create_user(
    sheets: SheetsService,
    chat_id: str,
    display_name: str,
    role: UserRole,
    language: str = "en"
) -> UserRecord:
    """
    Appends a new Users row in the pending_details state.

    Callers must check that no row exists for the chat id first.

    Returns:
        The record that was written
    """
    with LogContext(chat_id=chat_id):
        state = ensure_transition(RegistrationState.UNREGISTERED, RegistrationState.PENDING_DETAILS)

        record = UserRecord(
            user_id=generate_user_id(),
            name=display_name,
            chat_id=chat_id,
            status=state.value,
            role=role.value,
            language=language,
            joined=iso_timestamp(),
        )

        await sheets.append_row(USERS_SHEET, record.to_row())
        logger.info(f"New user created: {record.user_id} as {role.value}")

        return record


async def complete_profile(sheets: SheetsService, chat_id: str, name: str, aadhar: str) -> UserRecord:
    """
    Stores name and aadhar and activates the user.

    Issues exactly three cell writes: Name, Aadhar and Status.

    Raises:
        UserNotFound: If the chat has not registered
        InvalidTransition: If the stored state cannot become active
    """
    with LogContext(chat_id=chat_id):
        user = await require_user(sheets, chat_id)
        target = ensure_transition(user.state, RegistrationState.ACTIVE)

        # TODO: no lock between the lookup above and this write; concurrent
        # submissions for the same chat can interleave
        await sheets.batch_update_cells([
            CellUpdate(user_cell("Name", user.row_number, USERS_SHEET), name),
            CellUpdate(user_cell("Aadhar", user.row_number, USERS_SHEET), aadhar),
            CellUpdate(user_cell("Status", user.row_number, USERS_SHEET), target.value),
        ])

        logger.info(f"Profile completed at row {user.row_number}")

        return user.record.model_copy(update={"name": name, "aadhar": aadhar, "status": target.value})


async def update_language(sheets: SheetsService, chat_id: str, language: str) -> UserRecord:
    """
    Stores the user's preferred language.

    Raises:
        UserNotFound: If the chat has not registered
    """
    with LogContext(chat_id=chat_id):
        user = await require_user(sheets, chat_id)

        await sheets.batch_update_cells([
            CellUpdate(user_cell("Lang", user.row_number, USERS_SHEET), language),
        ])

        logger.info(f"Language set to {language}")

        return user.record.model_copy(update={"language": language})
