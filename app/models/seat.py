"""
app/models/seat.py

Purpose: Seat record model

- One row of the Seats sheet (BusID, SeatNo, 3 unused columns, Status)
- Seat status vocabulary
"""

from enum import Enum
from pydantic import BaseModel
from typing import List

SEAT_COLUMN_COUNT = 6
BUS_ID_COLUMN = 0
SEAT_NO_COLUMN = 1
SEAT_STATUS_COLUMN = 5


class SeatStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    LOCKED = "locked"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str) -> "SeatStatus":
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_occupied(self) -> bool:
        return self in (SeatStatus.BOOKED, SeatStatus.LOCKED)


class SeatRecord(BaseModel):
    bus_id: str
    seat_number: str
    status: str = ""

    @classmethod
    def from_row(cls, row: List[str]) -> "SeatRecord":
        cells = [str(value) for value in row] + [""] * (SEAT_COLUMN_COUNT - len(row))
        return cls(
            bus_id=cells[BUS_ID_COLUMN],
            seat_number=cells[SEAT_NO_COLUMN],
            status=cells[SEAT_STATUS_COLUMN],
        )

    @property
    def seat_status(self) -> SeatStatus:
        return SeatStatus.parse(self.status)
