# backend/autospa/routers/bookings.py
# POST goes through the allocator; PATCH = status/notes; DELETE = hard delete

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ..database import get_db
from ..models import Bookings as DBBookings
from ..schemas.bookings import (
    BookingCreate,
    BookingList,
    BookingRead,
    BookingStatus,
    BookingUpdate,
)
from ..services.booking_allocator import BookingRequest, CustomerInfo, create_booking

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _with_relations(query):
    return query.options(
        joinedload(DBBookings.customer),
        joinedload(DBBookings.vehicle),
        joinedload(DBBookings.service),
    )


@router.get("", response_model=BookingList)
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    target_date: Optional[date] = Query(None, alias="date"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    query = db.query(DBBookings)
    if status_filter is not None:
        query = query.filter(DBBookings.status == status_filter.value)
    if target_date is not None:
        query = query.filter(DBBookings.date == target_date.isoformat())

    total = query.with_entities(func.count(DBBookings.id)).scalar()
    bookings = (
        _with_relations(query)
        .order_by(DBBookings.date.desc(), DBBookings.time.asc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    return {"bookings": bookings, "total": total}


@router.get("/{id}", response_model=BookingRead)
def get_booking(id: int, db: Session = Depends(get_db)):
    obj = _with_relations(db.query(DBBookings)).filter(DBBookings.id == id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking_endpoint(
    data: BookingCreate,
    db: Session = Depends(get_db),
):
    """
    Book a slot.

    Rejections (rendered by the BookingRejected handler):
    SLOT_FULL 409, SERVICE_NOT_FOUND 404, DUPLICATE_REFERENCE 409,
    PERSISTENCE_ERROR 503.
    """
    request = BookingRequest(
        date=data.date,
        time=data.time,
        service_id=data.service_id,
        payment_method=data.payment_method,
        customer=CustomerInfo(
            name=data.customer.name,
            phone=data.customer.phone,
            plate=data.customer.plate,
            model=data.customer.model,
        ),
        notes=data.notes,
        reference_code=data.reference_code,
    )
    return create_booking(db, request)


@router.patch("/{id}", response_model=BookingRead)
def update_booking(
    id: int,
    data: BookingUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBBookings, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    changes = data.model_dump(exclude_unset=True)
    new_status = changes.get("status")

    if new_status is not None:
        if obj.status == BookingStatus.CANCELLED.value and new_status != BookingStatus.CANCELLED:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Cancelled bookings cannot be reopened",
            )
        obj.status = new_status.value
        if new_status == BookingStatus.CANCELLED:
            # Free the seat so the slot can be booked again
            obj.seat = None

    if "notes" in changes:
        obj.notes = changes["notes"]

    obj.updated_at = func.current_timestamp()
    db.commit()
    db.refresh(obj)

    logger.info(f"Booking updated: booking_id={obj.id}, status={obj.status}")
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBBookings, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    db.delete(obj)
    db.commit()
    logger.info(f"Booking deleted: booking_id={id}")
