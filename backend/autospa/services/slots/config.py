# backend/autospa/services/slots/config.py
"""
Business configuration snapshot for slot calculation.

The settings row is read once per request and frozen into a SlotConfig,
which is then passed explicitly to every calendar/grid/classifier call.
"""

from dataclasses import dataclass, field
from datetime import date


DEFAULT_OPEN_TIME = "08:00"
DEFAULT_CLOSE_TIME = "18:00"
DEFAULT_SLOT_DURATION = 30
DEFAULT_MAX_SLOTS_PER_TIME = 1
DEFAULT_BUFFER_MINUTES = 10
DEFAULT_TIMEZONE = "America/Asuncion"
DEFAULT_WORKING_DAYS = frozenset({1, 2, 3, 4, 5, 6})  # 0 = Sunday


def time_str_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time_str(total_minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def parse_working_days(raw: str | list[int] | None) -> frozenset[int]:
    """
    Parse working days stored as "1,2,3" (or "[1, 2, 3]") into weekday numbers.

    Unparseable entries are skipped; an empty/None value means the default
    Monday-Saturday week.
    """
    if not raw:
        return DEFAULT_WORKING_DAYS
    if isinstance(raw, (list, tuple, set, frozenset)):
        return frozenset(int(d) for d in raw)

    days = set()
    for part in raw.strip("[]").split(","):
        part = part.strip()
        if part.isdigit() and 0 <= int(part) <= 6:
            days.add(int(part))
    return frozenset(days)


def format_working_days(days) -> str:
    return ",".join(str(d) for d in sorted(set(days)))


def weekday_number(target_date: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday (the stored convention)."""
    return (target_date.weekday() + 1) % 7


@dataclass(frozen=True)
class SlotConfig:
    """
    Immutable view of the business settings used by the slot engine.

    Attributes:
        open_time / close_time: "HH:MM" day boundaries
        slot_duration_minutes: grid step
        max_slots_per_time: capacity per (date, time)
        working_days: weekday numbers, 0 = Sunday
        booking_buffer_minutes: minimum lead time before a slot starts
        timezone: IANA zone of the business
    """
    open_time: str = DEFAULT_OPEN_TIME
    close_time: str = DEFAULT_CLOSE_TIME
    slot_duration_minutes: int = DEFAULT_SLOT_DURATION
    max_slots_per_time: int = DEFAULT_MAX_SLOTS_PER_TIME
    working_days: frozenset[int] = field(default=DEFAULT_WORKING_DAYS)
    booking_buffer_minutes: int = DEFAULT_BUFFER_MINUTES
    timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_row(cls, row) -> "SlotConfig":
        """Build a snapshot from a BusinessSettings row."""
        return cls(
            open_time=row.open_time or DEFAULT_OPEN_TIME,
            close_time=row.close_time or DEFAULT_CLOSE_TIME,
            slot_duration_minutes=_or_default(row.slot_duration, DEFAULT_SLOT_DURATION),
            max_slots_per_time=_or_default(row.max_slots_per_time, DEFAULT_MAX_SLOTS_PER_TIME),
            working_days=parse_working_days(row.working_days),
            booking_buffer_minutes=_or_default(row.booking_buffer_minutes, DEFAULT_BUFFER_MINUTES),
            timezone=row.timezone or DEFAULT_TIMEZONE,
        )

    def to_dict(self) -> dict:
        return {
            "open_time": self.open_time,
            "close_time": self.close_time,
            "slot_duration_minutes": self.slot_duration_minutes,
            "max_slots_per_time": self.max_slots_per_time,
            "working_days": sorted(self.working_days),
            "booking_buffer_minutes": self.booking_buffer_minutes,
            "timezone": self.timezone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SlotConfig":
        return cls(
            open_time=data["open_time"],
            close_time=data["close_time"],
            slot_duration_minutes=int(data["slot_duration_minutes"]),
            max_slots_per_time=int(data["max_slots_per_time"]),
            working_days=frozenset(data["working_days"]),
            booking_buffer_minutes=int(data["booking_buffer_minutes"]),
            timezone=data["timezone"],
        )

    def is_working_day(self, target_date: date) -> bool:
        return weekday_number(target_date) in self.working_days


def _or_default(value, default: int) -> int:
    # 0 is a meaningful buffer, only None falls back
    return default if value is None else int(value)
