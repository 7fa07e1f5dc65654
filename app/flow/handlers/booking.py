"""
app/flow/handlers/booking.py

Handles: bus search, seat map and the booking commands

- Lists catalog buses
- Shows the seat map of one bus
- Seat selection, booking info, cancellation and live tracking are not built yet
"""

from typing import Any, Dict, List

from app.flow.context import BotContext
from app.schemas.webhook import InboundEvent
from app.services.bus_catalog import get_available_buses
from app.services.seat_service import build_seat_map
from app.core.logging import get_logger, LogContext
from utils.constants import NO_BUSES_MESSAGE, FEATURE_WIP_MESSAGE
from utils.telegram_utils import create_text_message

logger = get_logger(__name__)


async def handle_bus_search(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    with LogContext(chat_id=event.chat_id, intent="BUS_SEARCH"):
        buses = get_available_buses()

        if not buses:
            return [create_text_message(NO_BUSES_MESSAGE)]

        lines = ["🚌 *Available Buses* 🚌", ""]
        for index, bus in enumerate(buses, 1):
            lines.extend([
                f"*{index}. {bus.bus_id}* - {bus.owner}",
                f"📍 {bus.origin} → {bus.destination}",
                f"🕒 {bus.date} {bus.time}",
                f"💰 ₹{bus.price} • {bus.bus_type} • ⭐ {bus.rating}",
                f"💺 {bus.available_seats} seats available",
                f'📋 *"Show seats {bus.bus_id}"* to view seats',
                "",
            ])

        lines.extend([
            "💡 *Quick actions:*",
            '• "Show seats BUS101" - View seat map',
            '• "Book seat BUS101 3A" - Book specific seat',
        ])

        logger.info(f"Listed {len(buses)} buses")
        return [create_text_message("\n".join(lines))]


async def handle_seat_map(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    with LogContext(chat_id=event.chat_id, intent="SEAT_MAP"):
        seat_map = await build_seat_map(ctx.sheets, event.text)
        return [create_text_message(seat_map)]


async def handle_coming_soon(ctx: BotContext, event: InboundEvent) -> List[Dict[str, Any]]:
    """Seat selection, booking info, cancellation and live tracking."""
    return [create_text_message(FEATURE_WIP_MESSAGE)]
