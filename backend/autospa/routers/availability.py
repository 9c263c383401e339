# backend/autospa/routers/availability.py
"""
Availability API.

GET /availability?date=YYYY-MM-DD - per-slot status for a business-local day
"""

from datetime import date
from fastapi import APIRouter, Depends, Query
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..redis_client import get_redis
from ..schemas.availability import AvailabilityResponse
from ..services.business_settings import load_slot_config
from ..services.slots import calculate_day_availability


router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=AvailabilityResponse)
def get_availability(
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    """Slots of the day with occupancy and status (AVAILABLE/FULL/EXPIRED/PAST)."""
    config = load_slot_config(db, redis)
    return calculate_day_availability(db, target_date, config)
