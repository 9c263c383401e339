# backend/autospa/redis_client.py

from redis import Redis

from .config import settings

# None when REDIS_URL is not configured: callers fall back to the database
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url, decode_responses=True, socket_timeout=2.0)
    if settings.redis_url
    else None
)


def get_redis() -> Redis | None:
    """FastAPI dependency returning the shared Redis client (or None)."""
    return redis_client
