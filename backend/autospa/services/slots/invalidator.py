# backend/autospa/services/slots/invalidator.py
"""
Cache invalidation for the business settings snapshot.

Triggers:
✓ PUT /settings

Does NOT trigger:
✗ Booking created/cancelled (occupancy is counted on every request)
✗ Service changes (not part of the snapshot)
"""

from redis import Redis

from .redis_store import SettingsRedisStore


def invalidate_settings_cache(redis: Redis | None) -> int:
    """
    Drop the cached settings snapshot.

    Returns:
        Number of deleted cache keys (0 when Redis is not configured)
    """
    if redis is None:
        return 0
    return SettingsRedisStore(redis).delete()
