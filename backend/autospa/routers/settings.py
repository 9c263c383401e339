# backend/autospa/routers/settings.py
# Singleton "main" row: GET creates defaults, PUT = partial update

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from redis import Redis
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..database import get_db
from ..redis_client import get_redis
from ..schemas.settings import SettingsRead, SettingsUpdate
from ..services.business_settings import get_or_create_settings
from ..services.slots import invalidate_settings_cache
from ..services.slots.config import format_working_days, time_str_to_minutes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsRead)
def get_settings(db: Session = Depends(get_db)):
    return get_or_create_settings(db)


@router.put("", response_model=SettingsRead)
def update_settings(
    data: SettingsUpdate,
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    obj = get_or_create_settings(db)

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "working_days" in changes:
        changes["working_days"] = format_working_days(changes["working_days"])

    # open < close must also hold when only one side changes
    open_time = changes.get("open_time", obj.open_time)
    close_time = changes.get("close_time", obj.close_time)
    if time_str_to_minutes(open_time) >= time_str_to_minutes(close_time):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="open_time must be earlier than close_time",
        )

    for field, value in changes.items():
        setattr(obj, field, value)
    obj.updated_at = func.current_timestamp()

    db.commit()
    db.refresh(obj)

    invalidate_settings_cache(redis)
    logger.info(f"Business settings updated: {sorted(changes)}")
    return obj
