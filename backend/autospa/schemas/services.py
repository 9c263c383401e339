# backend/autospa/schemas/services.py

from typing import Optional
from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    duration_min: int = Field(gt=0)
    price: int = Field(ge=0)
    is_active: bool = True

    model_config = {"from_attributes": True}


class ServiceUpdate(BaseModel):
    is_active: Optional[bool] = None
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    duration_min: Optional[int] = Field(None, gt=0)
    price: Optional[int] = Field(None, ge=0)
    sort_order: Optional[int] = None

    model_config = {"from_attributes": True}


class ServiceRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    duration_min: int
    price: int
    is_active: bool
    sort_order: int

    model_config = {"from_attributes": True}
