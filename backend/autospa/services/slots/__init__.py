# backend/autospa/services/slots/__init__.py
"""
Slots calculation module.

Grid: slot start times from open/close/step (pure)
Availability: per-slot status from occupancy, business-local now and buffer
"""

from .config import SlotConfig
from .calculator import generate_slots
from .availability import SlotStatus, classify, calculate_day_availability
from .redis_store import SettingsRedisStore
from .invalidator import invalidate_settings_cache

__all__ = [
    "SlotConfig",
    "generate_slots",
    "SlotStatus",
    "classify",
    "calculate_day_availability",
    "SettingsRedisStore",
    "invalidate_settings_cache",
]
