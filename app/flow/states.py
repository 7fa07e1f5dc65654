"""
app/flow/states.py

Purpose: Defines the user registration lifecycle

- Enum for each registration stage
  (UNREGISTERED, PENDING_DETAILS, ACTIVE)
- Single source of truth for the Users "Status" column values
- State transition validation
- User roles
"""

from enum import Enum
from typing import Dict, List, Optional

from app.core.exceptions import InvalidTransition
from app.core.logging import get_logger
from utils.constants import STATUS_PENDING_DETAILS, STATUS_ACTIVE

logger = get_logger(__name__)


class RegistrationState(str, Enum):
    """
    Registration stages. Values are what the Users sheet stores in "Status";
    UNREGISTERED has no row at all.
    """

    UNREGISTERED = "unregistered"
    PENDING_DETAILS = STATUS_PENDING_DETAILS
    ACTIVE = STATUS_ACTIVE

    @classmethod
    def from_status(cls, status: Optional[str]) -> "RegistrationState":
        """
        Reads the stored status of an existing row.

        Empty or unrecognised values are treated as PENDING_DETAILS.
        """
        value = (status or "").strip().lower()
        if value == cls.ACTIVE.value:
            return cls.ACTIVE
        if value != cls.PENDING_DETAILS.value:
            logger.warning(f"Unrecognised user status '{status}', treating as pending_details")
        return cls.PENDING_DETAILS


class UserRole(str, Enum):
    USER = "user"
    MANAGER = "manager"
    OWNER = "owner"

    @classmethod
    def parse(cls, raw: str) -> Optional["UserRole"]:
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


# Valid state transitions
STATE_TRANSITIONS: Dict[RegistrationState, List[RegistrationState]] = {
    RegistrationState.UNREGISTERED: [
        RegistrationState.PENDING_DETAILS,
    ],
    RegistrationState.PENDING_DETAILS: [
        RegistrationState.ACTIVE,
    ],
    RegistrationState.ACTIVE: [
        RegistrationState.ACTIVE,  # Re-submitted details
    ],
}


def is_valid_transition(from_state: RegistrationState, to_state: RegistrationState) -> bool:
    """
    Checks if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is allowed, False otherwise
    """
    allowed_transitions = STATE_TRANSITIONS.get(from_state, [])
    return to_state in allowed_transitions


def ensure_transition(from_state: RegistrationState, to_state: RegistrationState) -> RegistrationState:
    """
    Validates a transition and returns the target state.

    Raises:
        InvalidTransition: If the transition is not allowed
    """
    if not is_valid_transition(from_state, to_state):
        logger.warning(f"Invalid registration transition attempted: {from_state.value} -> {to_state.value}")
        raise InvalidTransition(f"Invalid registration transition: {from_state.value} -> {to_state.value}")
    return to_state
