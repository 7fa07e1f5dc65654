"""
utils/telegram_utils.py

Purpose: Telegram reply markup builders

- Constructs inline keyboards
- Abstracts Bot API formatting
"""

from typing import List, Dict, Any, Optional

from utils.constants import (
    BUTTON_ROLE_USER,
    BUTTON_ROLE_MANAGER,
    BUTTON_ROLE_OWNER,
    BUTTON_BOOK_BUS,
    BUTTON_MY_BOOKING,
    BUTTON_MY_PROFILE,
    BUTTON_HELP,
    CB_REGISTER_ROLE_PREFIX,
    CB_BOOK_BUS,
    CB_MY_BOOKING,
    CB_MY_PROFILE,
    CB_HELP,
    CB_LANGUAGE_PREFIX,
    SUPPORTED_LANGUAGES,
)


def create_inline_keyboard(rows: List[List[Dict[str, str]]]) -> Dict[str, Any]:
    """
    Creates an inline keyboard markup.

    Args:
        rows: Button rows; each button dict has 'text' and 'callback_data'

    Returns:
        reply_markup payload

    Example:
        rows = [
            [{"text": "Yes", "callback_data": "cb_yes"}],
            [{"text": "No", "callback_data": "cb_no"}]
        ]
    """
    return {
        "inline_keyboard": [
            [
                {"text": button["text"], "callback_data": button["callback_data"]}
                for button in row
            ]
            for row in rows
        ]
    }


def role_selection_keyboard() -> Dict[str, Any]:
    return create_inline_keyboard([
        [{"text": BUTTON_ROLE_USER, "callback_data": f"{CB_REGISTER_ROLE_PREFIX}user"}],
        [{"text": BUTTON_ROLE_MANAGER, "callback_data": f"{CB_REGISTER_ROLE_PREFIX}manager"}],
        [{"text": BUTTON_ROLE_OWNER, "callback_data": f"{CB_REGISTER_ROLE_PREFIX}owner"}],
    ])


def main_menu_keyboard() -> Dict[str, Any]:
    return create_inline_keyboard([
        [
            {"text": BUTTON_BOOK_BUS, "callback_data": CB_BOOK_BUS},
            {"text": BUTTON_MY_BOOKING, "callback_data": CB_MY_BOOKING},
        ],
        [
            {"text": BUTTON_MY_PROFILE, "callback_data": CB_MY_PROFILE},
            {"text": BUTTON_HELP, "callback_data": CB_HELP},
        ],
    ])


def language_keyboard() -> Dict[str, Any]:
    return create_inline_keyboard([
        [{"text": label, "callback_data": f"{CB_LANGUAGE_PREFIX}{code}"}]
        for code, label in SUPPORTED_LANGUAGES.items()
    ])


def create_text_message(
    text: str,
    parse_mode: Optional[str] = "Markdown",
    reply_markup: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Creates one outbound reply for the dispatcher to send.

    Args:
        text: Message text (Telegram Markdown unless parse_mode is None)
        parse_mode: Formatting mode
        reply_markup: Optional inline keyboard

    Returns:
        Reply payload dict
    """
    return {
        "message": text,
        "parse_mode": parse_mode,
        "reply_markup": reply_markup
    }


def escape_markdown(value: str) -> str:
    """
    Escapes user-supplied text for Telegram's legacy Markdown mode.
    """
    for char in ("\\", "_", "*", "`", "["):
        value = value.replace(char, f"\\{char}")
    return value
