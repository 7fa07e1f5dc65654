"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (bot token, store credentials, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Constructed once at startup and passed into the service clients.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Telegram
    TELEGRAM_TOKEN: Optional[str] = Field(
        default=None,
        description="Telegram bot authentication token"
    )
    TELEGRAM_API_BASE: str = Field(
        default="https://api.telegram.org",
        description="Telegram Bot API base URL"
    )

    # Google Sheets (tabular store)
    GOOGLE_SERVICE_ACCOUNT_JSON: Optional[str] = Field(
        default=None,
        description="Service account credential blob (JSON, escaped newlines in private_key)"
    )
    SPREADSHEET_ID: Optional[str] = Field(
        default=None,
        description="Spreadsheet document identifier"
    )
    SHEETS_API_BASE: str = Field(
        default="https://sheets.googleapis.com/v4/spreadsheets",
        description="Google Sheets values API base URL"
    )

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Default timeout for outbound HTTP calls"
    )

    # Bot behaviour
    DEFAULT_LANGUAGE: str = Field(
        default="en",
        description="Language stored for newly registered users"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @validator("TELEGRAM_TOKEN")
    def validate_telegram_token(cls, v, values):
        """Ensure the bot token is set in production."""
        if values.get("ENVIRONMENT") == "production" and not v:
            raise ValueError("TELEGRAM_TOKEN is required in production environment")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def telegram_api_url(self) -> str:
        return f"{self.TELEGRAM_API_BASE}/bot{self.TELEGRAM_TOKEN}"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if not config.TELEGRAM_API_BASE:
        errors.append("TELEGRAM_API_BASE is required")

    if not config.SHEETS_API_BASE:
        errors.append("SHEETS_API_BASE is required")

    # Production-specific validations
    if config.is_production:
        if not config.TELEGRAM_TOKEN:
            errors.append("TELEGRAM_TOKEN is required in production")
        if not config.GOOGLE_SERVICE_ACCOUNT_JSON:
            errors.append("GOOGLE_SERVICE_ACCOUNT_JSON is required in production")
        if not config.SPREADSHEET_ID:
            errors.append("SPREADSHEET_ID is required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
