"""
app/services/tracking_service.py

Purpose: Periodic live-tracking job

- Reads active tracking subscriptions from the Tracking sheet
- Sends one update per subscription whose bus is in the catalog
- Invoked by the scheduler through the tracker endpoint
"""

from dataclasses import dataclass

from app.core.logging import get_logger
from app.services.bus_catalog import get_bus
from app.services.sheets_service import SheetsService, TABLE_RANGES
from app.services.telegram_service import TelegramService
from utils.constants import TRACKING_SHEET, TRACKING_UPDATE_MESSAGE

logger = get_logger(__name__)

ACTIVE_SUBSCRIPTION = "active"


@dataclass
class TrackingResult:
    updates_sent: int = 0
    skipped: int = 0


async def run_tracking_batch(sheets: SheetsService, telegram: TelegramService) -> TrackingResult:
    """
    Sends live-tracking updates for all active subscriptions.

    Rows: ChatID, BusID, Status. Store errors propagate to the caller.
    """
    rows = await sheets.get_rows(TABLE_RANGES[TRACKING_SHEET])
    result = TrackingResult()

    for row in rows[1:]:
        if len(row) < 3 or str(row[2]).strip().lower() != ACTIVE_SUBSCRIPTION:
            continue

        chat_id, bus_id = str(row[0]), str(row[1]).upper()
        bus = get_bus(bus_id)
        if bus is None:
            logger.warning(f"Tracking subscription for unknown bus {bus_id}")
            result.skipped += 1
            continue

        sent = await telegram.send_message(
            chat_id,
            TRACKING_UPDATE_MESSAGE.format(
                bus_id=bus.bus_id,
                origin=bus.origin,
                destination=bus.destination,
                date=bus.date,
                time=bus.time,
            ),
            parse_mode="Markdown"
        )
        if sent["success"]:
            result.updates_sent += 1
        else:
            result.skipped += 1

    logger.info(f"Tracking batch done: {result.updates_sent} sent, {result.skipped} skipped")
    return result
