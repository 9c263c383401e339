# backend/autospa/schemas/payment_methods.py

from typing import Optional
from pydantic import BaseModel, Field


class PaymentMethodCreate(BaseModel):
    name: str = Field(min_length=1)

    model_config = {"from_attributes": True}


class PaymentMethodUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None

    model_config = {"from_attributes": True}


class PaymentMethodRead(BaseModel):
    id: int
    name: str
    is_active: bool

    model_config = {"from_attributes": True}
