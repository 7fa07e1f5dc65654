"""
app/api/webhook.py

Purpose: Telegram webhook endpoint

- Receives updates (messages and callback queries)
- Parses and normalizes them
- Passes control to the flow dispatcher
- Always acknowledges with 200 "OK" so Telegram does not redeliver
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.api.deps import get_bot_context
from app.core.logging import get_logger
from app.flow.context import BotContext
from app.flow.dispatcher import dispatch_event
from app.schemas.webhook import parse_update, unanswered_callback_id

logger = get_logger(__name__)
router = APIRouter()


@router.post("/webhook", response_class=PlainTextResponse)
async def webhook_handler(request: Request, ctx: BotContext = Depends(get_bot_context)):
    """
    Telegram webhook endpoint.

    Handler outcomes are only logged; the response is always 200 "OK".
    """
    try:
        payload = await request.json()
        logger.debug(f"📱 Telegram update received: {payload}")

        event = parse_update(payload)
        if event is None:
            callback_id = unanswered_callback_id(payload)
            if callback_id:
                logger.info(f"Answering callback {callback_id} without an origin message")
                await ctx.telegram.answer_callback_query(callback_id)
            else:
                logger.info("Ignoring unsupported update type")
        else:
            logger.info(f"Normalized {event.kind} event from chat {event.chat_id}")
            await dispatch_event(event, ctx)

    except Exception as e:
        logger.error(f"Webhook error: {e}", exc_info=True)

    return PlainTextResponse("OK", status_code=200)


@router.get("/webhook")
async def webhook_verification():
    """
    Liveness check for the webhook route.
    """
    return {"status": "ok", "message": "Webhook endpoint is active"}
