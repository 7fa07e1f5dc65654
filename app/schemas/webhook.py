"""
app/schemas/webhook.py

Purpose: Telegram webhook payload schemas and parsers

- Validates incoming updates (messages and callback queries)
- Normalizes both into InboundEvent
- Ensures predictable request handling
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal


class TelegramUser(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None


class TelegramChat(BaseModel):
    id: int


class TelegramMessage(BaseModel):
    message_id: Optional[int] = None
    chat: TelegramChat
    text: Optional[str] = None
    from_user: Optional[TelegramUser] = Field(default=None, alias="from")


class TelegramCallbackQuery(BaseModel):
    id: str
    data: Optional[str] = None
    from_user: Optional[TelegramUser] = Field(default=None, alias="from")
    message: Optional[TelegramMessage] = None


class TelegramUpdate(BaseModel):
    """
    Subset of a Telegram Bot API Update used by the bot.
    """
    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None
    callback_query: Optional[TelegramCallbackQuery] = None


class Sender(BaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else "User"

    @property
    def greeting_name(self) -> str:
        return self.first_name or "User"


class InboundEvent(BaseModel):
    """
    Normalized inbound event for internal processing.
    Either a text message or a callback button press.
    """
    kind: Literal["text", "callback"]
    chat_id: str = Field(..., description="Chat identifier, the Users natural key")
    sender: Sender = Field(default_factory=Sender)
    text: str = ""
    data: str = ""
    callback_id: Optional[str] = None
    message_id: Optional[int] = None

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "text",
                "chat_id": "123456789",
                "sender": {"id": 123456789, "first_name": "Asha"},
                "text": "show seats BUS101"
            }
        }


def _sender_from(user: Optional[TelegramUser]) -> Sender:
    if user is None:
        return Sender()
    return Sender(id=user.id, first_name=user.first_name, last_name=user.last_name)


def parse_update(payload: dict) -> Optional[InboundEvent]:
    """
    Parses a Telegram webhook payload into an InboundEvent.

    Telegram format (JSON):
    {"message": {"chat": {"id": 1}, "text": "hi", "from": {"id": 1, "first_name": "A"}}}
    {"callback_query": {"id": "9", "data": "cb_help", "from": {...},
                        "message": {"chat": {"id": 1}, "message_id": 42}}}

    Returns None for updates the bot does not handle (edits, stickers, etc.).
    Raises pydantic.ValidationError on malformed payloads.
    """
    update = TelegramUpdate.model_validate(payload)

    if update.message is not None and update.message.text:
        message = update.message
        return InboundEvent(
            kind="text",
            chat_id=str(message.chat.id),
            sender=_sender_from(message.from_user),
            text=message.text,
            message_id=message.message_id
        )

    if update.callback_query is not None and update.callback_query.message is not None:
        callback = update.callback_query
        return InboundEvent(
            kind="callback",
            chat_id=str(callback.message.chat.id),
            sender=_sender_from(callback.from_user),
            data=callback.data or "",
            callback_id=callback.id,
            message_id=callback.message.message_id
        )

    return None


def unanswered_callback_id(payload: dict) -> Optional[str]:
    """
    Returns the id of a callback query that cannot be dispatched because it
    carries no originating message (inline-mode buttons). Such callbacks
    still need an answer so the client stops its loading indicator.
    """
    update = TelegramUpdate.model_validate(payload)
    callback = update.callback_query
    if callback is not None and callback.message is None:
        return callback.id
    return None
