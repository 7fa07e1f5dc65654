"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Builds the shared HTTP client and service clients
- Registers API routes (webhook, tracker)
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import time

import httpx

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.services.sheets_service import SheetsService
from app.services.telegram_service import TelegramService
from app.api import webhook, tracker

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("🚀 Starting GoRoute bot...")

    try:
        logger.info("Validating configuration...")
        validate_settings(settings)
        logger.info("✅ Configuration validated")

        http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        app.state.settings = settings
        app.state.http_client = http_client
        app.state.telegram_service = TelegramService(settings, http_client)
        app.state.sheets_service = SheetsService(settings, http_client)

        logger.info("🎉 GoRoute bot started successfully!")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info("🛑 Shutting down GoRoute bot...")

    try:
        await app.state.http_client.aclose()
        logger.info("✅ HTTP client closed")
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


app = FastAPI(
    title="GoRoute - Bus Ticketing Bot",
    description="Telegram chat-bot front end for bus ticketing backed by Google Sheets",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Telegram retries webhooks that take too long
    if process_time > 5.0:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(webhook.router, prefix=settings.API_PREFIX, tags=["Webhook"])
app.include_router(tracker.router, prefix=settings.API_PREFIX, tags=["Tracker"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "name": "GoRoute Bot API",
        "version": "1.0.0",
        "description": "Telegram bus-ticketing assistant",
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Configuration health check. Does not call Telegram or Sheets.
    """
    checks = {
        "telegram_token": "configured" if settings.TELEGRAM_TOKEN else "missing",
        "store_credentials": "configured" if settings.GOOGLE_SERVICE_ACCOUNT_JSON else "missing",
        "spreadsheet_id": "configured" if settings.SPREADSHEET_ID else "missing",
    }
    status = "healthy" if all(value == "configured" for value in checks.values()) else "degraded"

    return {
        "status": status,
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "version": "1.0.0",
        "checks": checks
    }


# Liveness probe (for Kubernetes/orchestration)
@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
