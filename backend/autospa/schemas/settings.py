# backend/autospa/schemas/settings.py

import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from ..services.calendar import is_valid_timezone
from ..services.slots.config import parse_working_days, time_str_to_minutes

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class SettingsUpdate(BaseModel):
    business_name: Optional[str] = Field(None, min_length=1)
    whatsapp_number: Optional[str] = None
    address: Optional[str] = None
    welcome_message: Optional[str] = None
    currency: Optional[str] = None
    hero_image_url: Optional[str] = None

    open_time: Optional[str] = None
    close_time: Optional[str] = None
    slot_duration: Optional[int] = Field(None, gt=0)
    max_slots_per_time: Optional[int] = Field(None, ge=1)
    working_days: Optional[list[int]] = Field(None, min_length=1)
    booking_buffer_minutes: Optional[int] = Field(None, ge=0)
    timezone: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _TIME_RE.match(v):
            raise ValueError("Time must be in HH:MM format")
        return v

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, v: Optional[list[int]]) -> Optional[list[int]]:
        if v is not None and any(d < 0 or d > 6 for d in v):
            raise ValueError("Working days are weekday numbers 0 (Sunday) to 6 (Saturday)")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_timezone(v):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @model_validator(mode="after")
    def open_before_close(self):
        if self.open_time and self.close_time:
            if time_str_to_minutes(self.open_time) >= time_str_to_minutes(self.close_time):
                raise ValueError("open_time must be earlier than close_time")
        return self


class SettingsRead(BaseModel):
    id: str
    business_name: str
    whatsapp_number: Optional[str] = None
    address: Optional[str] = None
    welcome_message: Optional[str] = None
    currency: str
    hero_image_url: Optional[str] = None

    open_time: str
    close_time: str
    slot_duration: int
    max_slots_per_time: int
    working_days: list[int]
    booking_buffer_minutes: int
    timezone: str

    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("working_days", mode="before")
    @classmethod
    def split_working_days(cls, v):
        return sorted(parse_working_days(v))
