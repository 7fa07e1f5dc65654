"""
app/models/bus.py

Purpose: Bus catalog entry

- Route, schedule, operator and fare of one bus
"""

from pydantic import BaseModel, Field


class Bus(BaseModel):
    bus_id: str = Field(..., alias="busID")
    origin: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")
    date: str
    time: str
    owner: str
    price: int
    bus_type: str = Field(..., alias="busType")
    rating: float
    available_seats: int = Field(..., alias="availableSeats")

    class Config:
        populate_by_name = True
