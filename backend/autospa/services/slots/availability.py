# backend/autospa/services/slots/availability.py
"""
Slot availability for a business day.

Combines the slot grid, current occupancy and the business-local "now"
into a per-slot status:

  PAST       slot already started today
  EXPIRED    starts within the booking buffer
  FULL       occupancy reached capacity
  AVAILABLE  bookable
"""

from datetime import date, datetime
from enum import Enum

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Bookings
from ..calendar import resolve_business_now
from .calculator import generate_slots
from .config import SlotConfig, time_str_to_minutes


class SlotStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    FULL = "FULL"
    EXPIRED = "EXPIRED"
    PAST = "PAST"


SLOT_REASONS: dict[SlotStatus, str] = {
    SlotStatus.AVAILABLE: "",
    SlotStatus.FULL: "FULL",
    SlotStatus.EXPIRED: "CLOSED",
    SlotStatus.PAST: "FINISHED",
}

CANCELLED = "CANCELLED"


def classify(
    slot: str,
    occupancy: int,
    capacity: int,
    is_today: bool,
    now_minute: int,
    buffer_minutes: int,
) -> SlotStatus:
    """Classify one slot; the first matching rule wins."""
    slot_minute = time_str_to_minutes(slot)

    if is_today:
        if slot_minute < now_minute:
            return SlotStatus.PAST
        if slot_minute - now_minute <= buffer_minutes:
            return SlotStatus.EXPIRED

    if occupancy >= capacity:
        return SlotStatus.FULL

    return SlotStatus.AVAILABLE


def calculate_day_availability(
    db: Session,
    target_date: date,
    config: SlotConfig,
    now: datetime | None = None,
) -> dict:
    """
    Calculate per-slot availability for target_date.

    Returns:
        Dict matching AvailabilityResponse.
    """
    business_now = resolve_business_now(config.timezone, now)
    is_today = target_date == business_now.date

    if not config.is_working_day(target_date):
        return {
            "date": target_date,
            "max_slots_per_time": config.max_slots_per_time,
            "is_working_day": False,
            "slots": [],
        }

    counts = count_bookings_by_time(db, target_date)

    slots = []
    for time_str in generate_slots(
        config.open_time, config.close_time, config.slot_duration_minutes
    ):
        count = counts.get(time_str, 0)
        status = classify(
            time_str,
            count,
            config.max_slots_per_time,
            is_today,
            business_now.minute_of_day,
            config.booking_buffer_minutes,
        )
        slots.append({
            "time": time_str,
            "status": status,
            "reason": SLOT_REASONS[status],
            "count": count,
            "available": status is SlotStatus.AVAILABLE,
        })

    return {
        "date": target_date,
        "max_slots_per_time": config.max_slots_per_time,
        "is_working_day": True,
        "slots": slots,
    }


# ── Database helpers ─────────────────────────────────────────────────────


def count_bookings_by_time(db: Session, target_date: date) -> dict[str, int]:
    """Occupancy per "HH:MM" for non-cancelled bookings on target_date."""
    rows = (
        db.query(Bookings.time, func.count(Bookings.id))
        .filter(
            Bookings.date == target_date.isoformat(),
            Bookings.status != CANCELLED,
        )
        .group_by(Bookings.time)
        .all()
    )
    return {time_str: count for time_str, count in rows}
