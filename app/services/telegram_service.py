"""
app/services/telegram_service.py

Purpose: Telegram Bot API message sending

- Sends text messages (Markdown, inline keyboards)
- Chat actions, callback answers, reply-markup edits
- Reports failures as result dicts; never raises
"""

import httpx
from typing import Dict, Any, Optional

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)

NOT_MODIFIED_MARKER = "message is not modified"


class TelegramService:
    """Service for calling the Telegram Bot API"""

    def __init__(self, config: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = config.telegram_api_url
        self._http_client = http_client
        self._timeout = config.HTTP_TIMEOUT_SECONDS

    async def _call(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Calls a Bot API method.

        Returns:
            {
                "success": True/False,
                "result": <Bot API result>,
                "error": "Optional error description"
            }
        """
        url = f"{self.base_url}/{method}"

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, json=payload)
        except httpx.TimeoutException:
            logger.error(f"Telegram API timeout: {method}")
            return {"success": False, "error": "Telegram API timeout"}
        except httpx.RequestError as e:
            logger.error(f"Network error calling Telegram {method}: {e}")
            return {"success": False, "error": str(e)}

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code == 200 and body.get("ok", False):
            return {"success": True, "result": body.get("result")}

        description = body.get("description") or response.text[:200]
        return {
            "success": False,
            "status_code": response.status_code,
            "error": description
        }

    async def send_message(
        self,
        chat_id: str,
        text: str,
        parse_mode: Optional[str] = None,
        reply_markup: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Sends a text message.

        Args:
            chat_id: Recipient chat
            text: Message text
            parse_mode: Optional formatting mode, e.g. "Markdown"
            reply_markup: Optional inline keyboard
        """
        payload: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if reply_markup:
            payload["reply_markup"] = reply_markup

        logger.info(f"📤 Sending message to {chat_id}")
        result = await self._call("sendMessage", payload)

        if not result["success"]:
            logger.error(f"❌ Failed to send message to {chat_id}: {result.get('error')}")

        return result

    async def send_chat_action(self, chat_id: str, action: str = "typing") -> Dict[str, Any]:
        result = await self._call("sendChatAction", {"chat_id": chat_id, "action": action})
        if not result["success"]:
            logger.warning(f"Chat action '{action}' failed for {chat_id}: {result.get('error')}")
        return result

    async def answer_callback_query(self, callback_query_id: str) -> Dict[str, Any]:
        result = await self._call("answerCallbackQuery", {"callback_query_id": callback_query_id})
        if not result["success"]:
            logger.warning(f"Answering callback {callback_query_id} failed: {result.get('error')}")
        return result

    async def edit_message_reply_markup(
        self,
        chat_id: str,
        message_id: int,
        reply_markup: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Replaces (or with None, removes) the inline keyboard of a sent message.

        Telegram rejects edits that change nothing with "message is not
        modified"; that rejection is expected and only logged at debug level.
        """
        payload: Dict[str, Any] = {"chat_id": chat_id, "message_id": message_id}
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup

        result = await self._call("editMessageReplyMarkup", payload)

        if not result["success"]:
            error = str(result.get("error", ""))
            if NOT_MODIFIED_MARKER in error.lower():
                logger.debug(f"Keyboard already cleared for message {message_id}")
                result["not_modified"] = True
            else:
                logger.warning(f"Clearing keyboard failed for message {message_id}: {error}")

        return result
