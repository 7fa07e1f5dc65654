"""
app/flow/context.py

Purpose: Per-request handler context

- Bundles the settings and service clients a handler may use
- Built from the shared clients on every webhook call; holds no state
"""

from dataclasses import dataclass

from app.core.config import Settings
from app.services.sheets_service import SheetsService
from app.services.telegram_service import TelegramService


@dataclass(frozen=True)
class BotContext:
    settings: Settings
    sheets: SheetsService
    telegram: TelegramService
