"""
utils/validation_utils.py

Purpose: Input validation

- Bus id extraction from free text
- Profile-details message parsing
- Input sanitization
"""

import re
from typing import Optional, Tuple

from app.core.exceptions import InvalidFormat

BUS_ID_PATTERN = re.compile(r"(BUS\d+)", re.IGNORECASE)

PROFILE_DETAILS_SPLIT = re.compile(r"details", re.IGNORECASE)


def extract_bus_id(text: str) -> Optional[str]:
    """
    Finds the first `BUS<digits>` token anywhere in the text.

    Args:
        text: Free text such as "show seats bus101"

    Returns:
        Uppercased bus id (e.g. "BUS101") or None
    """
    if not text:
        return None

    match = BUS_ID_PATTERN.search(text)
    return match.group(1).upper() if match else None


def parse_profile_details(text: str) -> Tuple[str, str]:
    """
    Parses "my profile details <name> / <aadhar>".

    The text is split on the first "details" (any casing), then the remainder
    on the first "/".

    Args:
        text: Raw message text

    Returns:
        (name, aadhar), both trimmed

    Raises:
        InvalidFormat: If either split yields fewer than 2 parts or a value is empty
    """
    parts = PROFILE_DETAILS_SPLIT.split(text or "", maxsplit=1)
    if len(parts) < 2:
        raise InvalidFormat("Missing 'details' keyword")

    segments = parts[1].split("/", 1)
    if len(segments) < 2:
        raise InvalidFormat("Missing '/' between name and aadhar")

    name = sanitize_text(segments[0])
    aadhar = sanitize_text(segments[1])

    if not name or not aadhar:
        raise InvalidFormat("Name and aadhar must not be empty")

    return name, aadhar


def sanitize_text(value: str) -> str:
    """
    Trims surrounding whitespace and collapses internal runs of spaces.
    """
    return " ".join((value or "").split())
