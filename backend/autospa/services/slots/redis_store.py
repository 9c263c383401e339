# backend/autospa/services/slots/redis_store.py
"""
Redis cache for the business settings snapshot.

Key format: cache:settings:main
Value: JSON of SlotConfig.to_dict(), expires after settings_cache_ttl.

Only availability reads go through the cache. The booking allocator
always reads capacity from the database inside its own transaction.
"""

import json
import logging

from redis import Redis
from redis.exceptions import RedisError

from ...config import settings
from .config import SlotConfig

logger = logging.getLogger(__name__)


class SettingsRedisStore:
    """Redis storage wrapper for the SlotConfig snapshot."""

    KEY = "cache:settings:main"

    def __init__(self, redis: Redis, ttl_seconds: int | None = None):
        self.redis = redis
        self.ttl_seconds = ttl_seconds or settings.settings_cache_ttl

    # ── Write ────────────────────────────────────────────────────────────

    def store(self, config: SlotConfig) -> None:
        try:
            self.redis.setex(self.KEY, self.ttl_seconds, json.dumps(config.to_dict()))
        except RedisError:
            logger.exception("Failed to cache business settings")

    def delete(self) -> int:
        try:
            return int(self.redis.delete(self.KEY))
        except RedisError:
            logger.exception("Failed to invalidate business settings cache")
            return 0

    # ── Read ─────────────────────────────────────────────────────────────

    def get(self) -> SlotConfig | None:
        """Cached snapshot, or None on miss / unreadable value / Redis error."""
        try:
            raw = self.redis.get(self.KEY)
        except RedisError:
            logger.exception("Failed to read business settings cache")
            return None

        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()

        try:
            return SlotConfig.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed settings cache entry")
            return None
