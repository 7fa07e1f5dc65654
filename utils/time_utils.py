"""
utils/time_utils.py

Purpose: Time and identifier helpers

- User id generation
- ISO timestamps for join dates
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_user_id(now: Optional[datetime] = None) -> str:
    """
    Generates a user id from the current timestamp in milliseconds.

    Example: USER1710912345678
    """
    now = now or utc_now()
    return f"USER{int(now.timestamp() * 1000)}"


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """
    Formats a join timestamp, e.g. 2024-03-20T08:00:00.000Z
    """
    now = now or utc_now()
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def format_join_date(raw: str) -> str:
    """
    Renders a stored join timestamp as a date, leaving unparseable values as-is.
    """
    if not raw:
        return ""
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return raw
    return parsed.strftime("%Y-%m-%d")
