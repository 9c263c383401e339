# backend/autospa/services/calendar.py
"""
Business-local calendar.

Converts an instant into the business's calendar day and minute-of-day,
independent of the server's local timezone.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusinessNow:
    date: date
    minute_of_day: int


def get_business_zone(tz_name: str | None) -> ZoneInfo:
    """
    Resolve an IANA zone, falling back to the configured default zone.

    Availability must always render, so an invalid identifier is logged
    and replaced instead of raised.
    """
    if tz_name:
        try:
            return ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown business timezone %r, using %s", tz_name, settings.default_timezone)
    return ZoneInfo(settings.default_timezone)


def is_valid_timezone(tz_name: str) -> bool:
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def resolve_business_now(tz_name: str | None, now: datetime | None = None) -> BusinessNow:
    """
    Current date and minute-of-day as observed in the business timezone.

    Args:
        tz_name: IANA identifier, e.g. "America/Asuncion"
        now: aware instant to convert (naive values are taken as UTC);
             defaults to the current time
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    local = now.astimezone(get_business_zone(tz_name))
    return BusinessNow(
        date=local.date(),
        minute_of_day=local.hour * 60 + local.minute,
    )
