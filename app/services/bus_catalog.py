"""
app/services/bus_catalog.py

Purpose: Bus catalog

- Read-only list of scheduled buses (sample data, not the store)
- Lookup by bus id
"""

from typing import List, Optional

from app.models.bus import Bus
from app.core.logging import get_logger

logger = get_logger(__name__)

SAMPLE_BUSES = [
    {
        "busID": "BUS101",
        "from": "Mumbai",
        "to": "Pune",
        "date": "2024-03-20",
        "time": "08:00",
        "owner": "Sharma Travels",
        "price": 450,
        "busType": "AC Sleeper",
        "rating": 4.2,
        "availableSeats": 15,
    },
    {
        "busID": "BUS102",
        "from": "Pune",
        "to": "Mumbai",
        "date": "2024-03-20",
        "time": "10:30",
        "owner": "Patel Bus Service",
        "price": 380,
        "busType": "Non-AC Seater",
        "rating": 4.0,
        "availableSeats": 8,
    },
]


def get_available_buses() -> List[Bus]:
    logger.debug("Building bus list from sample data")
    return [Bus.model_validate(entry) for entry in SAMPLE_BUSES]


def get_bus(bus_id: Optional[str]) -> Optional[Bus]:
    if not bus_id:
        return None
    for bus in get_available_buses():
        if bus.bus_id == bus_id:
            return bus
    return None
