"""
app/api/deps.py

Purpose: FastAPI dependencies

- Resolves the service clients built during application startup
- Overridable in tests via app.dependency_overrides
"""

from fastapi import Request

from app.core.config import Settings
from app.flow.context import BotContext
from app.services.sheets_service import SheetsService
from app.services.telegram_service import TelegramService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_sheets_service(request: Request) -> SheetsService:
    return request.app.state.sheets_service


def get_telegram_service(request: Request) -> TelegramService:
    return request.app.state.telegram_service


def get_bot_context(request: Request) -> BotContext:
    return BotContext(
        settings=get_settings(request),
        sheets=get_sheets_service(request),
        telegram=get_telegram_service(request),
    )
