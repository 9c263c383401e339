# backend/autospa/services/business_settings.py
"""Loading the singleton business settings row."""

import logging

from redis import Redis
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import BusinessSettings
from .slots.config import SlotConfig
from .slots.redis_store import SettingsRedisStore

logger = logging.getLogger(__name__)

SETTINGS_ID = "main"


def get_or_create_settings(db: Session) -> BusinessSettings:
    """Return the "main" settings row, creating it with defaults if missing."""
    row = db.get(BusinessSettings, SETTINGS_ID)
    if row is not None:
        return row

    db.add(BusinessSettings(id=SETTINGS_ID))
    try:
        db.commit()
    except IntegrityError:
        # Another request created it first
        db.rollback()
        logger.info("Business settings created concurrently, re-reading")
    else:
        logger.info("Default business settings created")
    return db.get(BusinessSettings, SETTINGS_ID, populate_existing=True)


def load_slot_config(db: Session, redis: Redis | None = None) -> SlotConfig:
    """
    Load the settings snapshot for one request.

    Served from Redis when available; on a miss the row is read and the
    snapshot cached for settings_cache_ttl seconds.
    """
    store = SettingsRedisStore(redis) if redis is not None else None
    if store is not None:
        cached = store.get()
        if cached is not None:
            return cached

    row = db.get(BusinessSettings, SETTINGS_ID)
    config = SlotConfig.from_row(row) if row is not None else SlotConfig()

    if store is not None:
        store.store(config)
    return config
