"""
app/api/tracker.py

Purpose: Scheduled tracking endpoint

- Called by a cron scheduler with GET (or HEAD)
- Runs one live-tracking batch
- Other methods are answered with 405
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_sheets_service, get_telegram_service
from app.core.logging import get_logger
from app.schemas.response import TrackingResponse
from app.services.sheets_service import SheetsService
from app.services.telegram_service import TelegramService
from app.services.tracking_service import run_tracking_batch

logger = get_logger(__name__)
router = APIRouter()


@router.api_route("/tracker", methods=["GET", "HEAD"])
async def run_tracker(
    sheets: SheetsService = Depends(get_sheets_service),
    telegram: TelegramService = Depends(get_telegram_service),
):
    try:
        result = await run_tracking_batch(sheets, telegram)
    except Exception as e:
        logger.error(f"CRON JOB FAILED: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=TrackingResponse(
                success=False,
                message="Tracking failed.",
                error=str(e)
            ).model_dump(exclude_none=True)
        )

    logger.info(f"CRON JOB: Tracking batch completed. Updates sent: {result.updates_sent}")

    return JSONResponse(
        status_code=200,
        content=TrackingResponse(
            success=True,
            message="Tracking batch completed.",
            updates_sent=result.updates_sent
        ).model_dump(exclude_none=True)
    )
