# backend/autospa/routers/services.py
# PATCH = ALLOWED, DELETE = soft-delete (is_active) while bookings reference it

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Bookings as DBBookings, Services as DBServices
from ..schemas.services import (
    ServiceCreate,
    ServiceUpdate,
    ServiceRead,
)

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=list[ServiceRead])
def list_services(include_inactive: bool = False, db: Session = Depends(get_db)):
    query = db.query(DBServices)
    if not include_inactive:
        query = query.filter(DBServices.is_active == 1)
    return query.order_by(DBServices.sort_order.asc(), DBServices.id.asc()).all()


@router.get("/{id}", response_model=ServiceRead)
def get_service(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBServices, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(
    data: ServiceCreate,
    db: Session = Depends(get_db),
):
    max_sort = db.query(func.max(DBServices.sort_order)).scalar() or 0
    values = data.model_dump()
    values["is_active"] = int(values["is_active"])
    obj = DBServices(**values, sort_order=max_sort + 1)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=ServiceRead)
def update_service(
    id: int,
    data: ServiceUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBServices, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    # Price changes never touch existing bookings (total_price is a snapshot)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "is_active":
            value = int(value)
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBServices, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    referenced = (
        db.query(DBBookings.id)
        .filter(DBBookings.service_id == id)
        .first()
        is not None
    )
    if referenced:
        obj.is_active = 0
    else:
        db.delete(obj)
    db.commit()
