from pydantic import BaseModel
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None


class TrackingResponse(BaseModel):
    """
    Body returned by the scheduled tracking endpoint.
    """
    success: bool
    message: str
    updates_sent: Optional[int] = None
    error: Optional[str] = None
