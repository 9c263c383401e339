# backend/autospa/schemas/customers.py

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel


class VehicleRead(BaseModel):
    id: int
    plate: str
    model: Optional[str] = None
    customer_id: int

    model_config = {"from_attributes": True}


class CustomerRead(BaseModel):
    id: int
    name: str
    phone: str
    created_at: datetime

    model_config = {"from_attributes": True}


class CustomerWithStats(CustomerRead):
    vehicles: list[VehicleRead] = []
    completed_count: int = 0
    total_spent: int = 0
    last_visit: Optional[date] = None
