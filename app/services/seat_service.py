"""
app/services/seat_service.py

Purpose: Seat map rendering

- Fetches seat rows for a bus from the Seats sheet
- Builds a seat -> status lookup
- Renders a fixed 10 x 4 grid with an aisle and availability footer
"""

from typing import Dict, List, Optional

from app.core.exceptions import MissingBusID, NoSeatsFound, SeatDataUnavailable
from app.core.logging import get_logger, LogContext
from app.models.bus import Bus
from app.models.seat import SeatRecord, SeatStatus
from app.services.bus_catalog import get_bus
from app.services.sheets_service import SheetsService, TABLE_RANGES
from utils.constants import (
    SEATS_SHEET,
    SEAT_AVAILABLE,
    SEAT_OCCUPIED,
    SEAT_UNKNOWN,
    SEAT_ROWS,
    SEAT_COLUMNS,
    AISLE_AFTER_COLUMN,
)
from utils.validation_utils import extract_bus_id

logger = get_logger(__name__)

AISLE = "    "


async def fetch_bus_seats(sheets: SheetsService, bus_id: str) -> List[SeatRecord]:
    """
    Reads the Seats sheet and keeps the rows of one bus.

    Raises:
        SeatDataUnavailable: The sheet returned no rows at all
        NoSeatsFound: No row matches the bus id
    """
    rows = await sheets.get_rows(TABLE_RANGES[SEATS_SHEET])
    if not rows:
        raise SeatDataUnavailable(bus_id)

    seats = [
        SeatRecord.from_row(row)
        for row in rows[1:]
        if row and str(row[0]) == bus_id
    ]

    if not seats:
        raise NoSeatsFound(bus_id)

    return seats


def build_status_lookup(seats: List[SeatRecord]) -> Dict[str, SeatStatus]:
    lookup: Dict[str, SeatStatus] = {}
    for seat in seats:
        lookup.setdefault(seat.seat_number, seat.seat_status)
    return lookup


def seat_marker(status: Optional[SeatStatus]) -> str:
    if status is SeatStatus.AVAILABLE:
        return SEAT_AVAILABLE
    if status is not None and status.is_occupied:
        return SEAT_OCCUPIED
    return SEAT_UNKNOWN


def render_seat_map(bus_id: str, seats: List[SeatRecord], bus: Optional[Bus] = None) -> str:
    """
    Renders the seat grid as a Markdown message.

    Args:
        bus_id: Uppercased bus id
        seats: Seat rows of this bus
        bus: Catalog entry for the header, if known

    Returns:
        Message text
    """
    lookup = build_status_lookup(seats)

    origin = bus.origin if bus else "N/A"
    destination = bus.destination if bus else "N/A"
    date = bus.date if bus else "N/A"
    time = bus.time if bus else "N/A"

    lines = [
        f"🚍 *Seat Map - {bus_id}*",
        f"📍 {origin} → {destination}",
        f"🕒 {date} {time}",
        "",
        f"Legend: {SEAT_AVAILABLE} Available • {SEAT_OCCUPIED} Booked • {SEAT_UNKNOWN} Unknown",
        "",
    ]

    for row in range(1, SEAT_ROWS + 1):
        cells = []
        for column in SEAT_COLUMNS:
            label = f"{row}{column}"
            cells.append(f"{seat_marker(lookup.get(label))}{label}")
            if column == AISLE_AFTER_COLUMN:
                cells.append(AISLE)
        lines.append(" ".join(cells))

    available = sum(1 for seat in seats if seat.status == SeatStatus.AVAILABLE.value)

    lines.extend([
        "",
        f"📊 *{available}* seats available / {len(seats)}",
        "",
        f'💡 *Book a seat:* "Book seat {bus_id} SEAT\\_NUMBER"',
        f'   Example: "Book seat {bus_id} 1A"',
    ])

    return "\n".join(lines)


async def build_seat_map(sheets: SheetsService, text: str) -> str:
    """
    Seat map for the bus named in free text, e.g. "show seats bus101".

    Raises:
        MissingBusID: No BUS<digits> token in the text
        SeatDataUnavailable / NoSeatsFound: see fetch_bus_seats
    """
    bus_id = extract_bus_id(text)
    if not bus_id:
        raise MissingBusID()

    with LogContext(bus_id=bus_id):
        seats = await fetch_bus_seats(sheets, bus_id)
        logger.info(f"Rendering seat map from {len(seats)} seat rows")
        return render_seat_map(bus_id, seats, get_bus(bus_id))
