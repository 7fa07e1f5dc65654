"""
app/flow/handlers/menu.py

Handles: help, language menu, status, greetings, unknown input
"""

from typing import Any, Dict, List

from app.flow.context import BotContext
from app.schemas.webhook import InboundEvent
from utils.constants import (
    HELP_MESSAGE,
    LANGUAGE_MENU_MESSAGE,
    FEATURE_WIP_MESSAGE,
    GREETING_MESSAGE,
    UNKNOWN_COMMAND_MESSAGE,
)
from utils.telegram_utils import create_text_message, main_menu_keyboard, language_keyboard


async def handle_help(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    return [create_text_message(HELP_MESSAGE, reply_markup=main_menu_keyboard())]


async def handle_language_menu(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    return [create_text_message(LANGUAGE_MENU_MESSAGE, reply_markup=language_keyboard())]


async def handle_system_status(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    return [create_text_message(FEATURE_WIP_MESSAGE)]


async def handle_greeting(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    return [create_text_message(GREETING_MESSAGE.format(name=event.sender.greeting_name), parse_mode=None)]


async def handle_unknown(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    return [create_text_message(UNKNOWN_COMMAND_MESSAGE, parse_mode=None)]
