# backend/autospa/schemas/availability.py
"""
Pydantic schemas for the availability API.
"""

from datetime import date
from pydantic import BaseModel, Field

from ..services.slots.availability import SlotStatus


class SlotInfo(BaseModel):
    """Status of a single slot."""
    time: str  # "HH:MM"
    status: SlotStatus
    reason: str = Field(description="Short code for non-available slots: FULL / CLOSED / FINISHED")
    count: int = Field(description="Non-cancelled bookings at this time")
    available: bool

    model_config = {"from_attributes": True}


class AvailabilityResponse(BaseModel):
    """Per-slot availability for one business-local date."""
    date: date
    max_slots_per_time: int
    is_working_day: bool
    slots: list[SlotInfo]

    model_config = {"from_attributes": True}
