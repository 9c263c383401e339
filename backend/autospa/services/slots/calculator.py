# backend/autospa/services/slots/calculator.py
"""
Slot grid for a business day.

Produces the ordered "HH:MM" start times between open and close.
Knows nothing about bookings or the current time; see availability.py.
"""

from .config import minutes_to_time_str, time_str_to_minutes


def generate_slots(
    open_time: str,
    close_time: str,
    slot_duration_minutes: int,
) -> list[str]:
    """
    Generate slot start times in [open_time, close_time).

    A slot that would start at or after close_time is not emitted.
    Empty list when the step is not positive or the day is empty.
    """
    if slot_duration_minutes <= 0:
        return []

    start_min = time_str_to_minutes(open_time)
    end_min = time_str_to_minutes(close_time)

    slots: list[str] = []
    t = start_min
    while t < end_min:
        slots.append(minutes_to_time_str(t))
        t += slot_duration_minutes

    return slots
