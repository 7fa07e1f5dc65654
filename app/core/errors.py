from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.exceptions import (
    GoRouteError,
    StoreError,
    StoreErrorKind,
    UserNotFound,
    InvalidFormat,
    MissingBusID,
    NoSeatsFound,
    SeatDataUnavailable,
)
from app.schemas.response import ErrorResponse
from app.core.config import settings
from utils.constants import (
    STORE_CONFIG_ERROR_MESSAGE,
    STORE_ACCESS_ERROR_MESSAGE,
    GENERIC_RETRY_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    INVALID_PROFILE_FORMAT_MESSAGE,
    USER_NOT_FOUND_MESSAGE,
    SPECIFY_BUS_ID_MESSAGE,
    NO_SEATS_FOUND_MESSAGE,
    SEAT_MAP_ERROR_MESSAGE,
)

logger = logging.getLogger(__name__)

STORE_MESSAGES = {
    StoreErrorKind.UNAVAILABLE: STORE_CONFIG_ERROR_MESSAGE,
    StoreErrorKind.AUTH: STORE_CONFIG_ERROR_MESSAGE,
    StoreErrorKind.PERMISSION: STORE_ACCESS_ERROR_MESSAGE,
    StoreErrorKind.UNEXPECTED: GENERIC_RETRY_MESSAGE,
}


def user_message_for(exc: Exception) -> str:
    """
    Maps a handler failure to the text shown to the chat user.

    Never includes the exception's own message.
    """
    if isinstance(exc, StoreError):
        return STORE_MESSAGES.get(exc.kind, GENERIC_RETRY_MESSAGE)
    if isinstance(exc, InvalidFormat):
        return INVALID_PROFILE_FORMAT_MESSAGE
    if isinstance(exc, UserNotFound):
        return USER_NOT_FOUND_MESSAGE
    if isinstance(exc, MissingBusID):
        return SPECIFY_BUS_ID_MESSAGE
    if isinstance(exc, NoSeatsFound):
        return NO_SEATS_FOUND_MESSAGE.format(bus_id=exc.bus_id)
    if isinstance(exc, SeatDataUnavailable):
        return SEAT_MAP_ERROR_MESSAGE.format(bus_id=exc.bus_id)
    return GENERIC_ERROR_MESSAGE


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """
    @app.exception_handler(GoRouteError)
    async def goroute_exception_handler(request: Request, exc: GoRouteError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.message,
                code=exc.code,
                details=exc.details
            ).model_dump()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail),
                code="HTTP_ERROR",
                details=None
            ).model_dump(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles Pydantic validation errors.
        """
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="Input validation failed",
                code="VALIDATION_ERROR",
                details=exc.errors()
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else "unknown"
            },
            exc_info=True
        )

        message = "An internal error occurred. Please try again later." if settings.is_production else str(exc)

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=message,
                code="INTERNAL_ERROR",
                details=None
            ).model_dump()
        )
