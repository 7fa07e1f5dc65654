from enum import Enum
from typing import Optional, Any


class GoRouteError(Exception):
    """
    Base exception for the GoRoute bot.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class StoreErrorKind(str, Enum):
    """
    Failure categories of the tabular store, attached where the failure happens.
    """
    UNAVAILABLE = "UNAVAILABLE"
    AUTH = "AUTH"
    PERMISSION = "PERMISSION"
    UNEXPECTED = "UNEXPECTED"


class StoreError(GoRouteError):
    """
    Raised when the tabular store (Google Sheets) cannot serve a request.
    """
    def __init__(
        self,
        message: str = "Store request failed",
        kind: StoreErrorKind = StoreErrorKind.UNEXPECTED,
        details: Optional[Any] = None
    ):
        self.kind = kind
        super().__init__(message, code=f"STORE_{kind.value}", status_code=502, details=details)


class StoreUnavailable(StoreError):
    """
    Raised when store credentials are missing or malformed.
    """
    def __init__(self, message: str = "Store credentials missing or malformed", details: Optional[Any] = None):
        super().__init__(message, kind=StoreErrorKind.UNAVAILABLE, details=details)


class StoreAuthError(StoreError):
    """
    Raised when the store rejects the service identity.
    """
    def __init__(self, message: str = "Store rejected authorization", details: Optional[Any] = None):
        super().__init__(message, kind=StoreErrorKind.AUTH, details=details)


class StorePermissionError(StoreError):
    """
    Raised when the store denies access to the target document.
    """
    def __init__(self, message: str = "Store denied access to the document", details: Optional[Any] = None):
        super().__init__(message, kind=StoreErrorKind.PERMISSION, details=details)


class UserNotFound(GoRouteError):
    """
    Raised when no Users row matches the chat id.
    """
    def __init__(self, message: str = "User not registered", details: Optional[Any] = None):
        super().__init__(message, code="USER_NOT_FOUND", status_code=404, details=details)


class InvalidFormat(GoRouteError):
    """
    Raised when profile text does not match `... details <name> / <aadhar>`.
    """
    def __init__(self, message: str = "Invalid profile format", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_FORMAT", status_code=422, details=details)


class InvalidTransition(GoRouteError):
    """
    Raised when a registration state change is not allowed.
    """
    def __init__(self, message: str = "Invalid registration transition", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_TRANSITION", status_code=409, details=details)


class MissingBusID(GoRouteError):
    def __init__(self, message: str = "No bus id in request", details: Optional[Any] = None):
        super().__init__(message, code="MISSING_BUS_ID", status_code=422, details=details)


class NoSeatsFound(GoRouteError):
    def __init__(self, bus_id: str, details: Optional[Any] = None):
        self.bus_id = bus_id
        super().__init__(f"No seats found for {bus_id}", code="NO_SEATS_FOUND", status_code=404, details=details)


class SeatDataUnavailable(GoRouteError):
    def __init__(self, bus_id: str, details: Optional[Any] = None):
        self.bus_id = bus_id
        super().__init__("Seat data unavailable", code="SEAT_DATA_UNAVAILABLE", status_code=503, details=details)


class UnexpectedError(GoRouteError):
    """
    Raised for failures that fit no other category.
    """
    def __init__(self, message: str = "Unexpected error", details: Optional[Any] = None):
        super().__init__(message, code="UNEXPECTED_ERROR", status_code=500, details=details)
