# backend/autospa/schemas/bookings.py

import re
from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .customers import CustomerRead, VehicleRead
from .services import ServiceRead
from ..services.identity import normalize_plate

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class BookingCustomer(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    plate: str = Field(min_length=1)
    model: Optional[str] = None

    @field_validator("name", "phone", "plate")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("phone")
    @classmethod
    def has_digits(cls, v: str) -> str:
        if not re.search(r"\d", v):
            raise ValueError("phone must contain digits")
        return v

    @field_validator("plate")
    @classmethod
    def plate_not_empty(cls, v: str) -> str:
        # identity is keyed on the normalized plate
        if not normalize_plate(v):
            raise ValueError("plate must contain letters or digits")
        return v


class BookingCreate(BaseModel):
    date: date  # business-local, YYYY-MM-DD
    time: str = Field(description="Slot start, HH:MM")
    service_id: int
    payment_method: str = Field(min_length=1)
    customer: BookingCustomer
    notes: Optional[str] = None
    reference_code: Optional[str] = Field(None, min_length=1)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not _TIME_RE.match(v):
            raise ValueError("Time must be in HH:MM format")
        return v


class BookingUpdate(BaseModel):
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingRead(BaseModel):
    id: int
    reference_code: str

    date: date
    time: str

    status: BookingStatus
    payment_method: str
    total_price: int
    notes: Optional[str] = None

    customer_id: int
    vehicle_id: int
    service_id: int

    customer: CustomerRead
    vehicle: VehicleRead
    service: ServiceRead

    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingList(BaseModel):
    bookings: list[BookingRead]
    total: int
