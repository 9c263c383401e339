# backend/autospa/routers/customers.py
# Read-only: customers are created/updated by the booking allocator

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from ..database import get_db
from ..models import (
    Bookings as DBBookings,
    Customers as DBCustomers,
    Vehicles as DBVehicles,
)
from ..schemas.customers import CustomerWithStats

router = APIRouter(prefix="/customers", tags=["customers"])

COMPLETED = "COMPLETED"


@router.get("", response_model=list[CustomerWithStats])
def list_customers(
    search: Optional[str] = None,
    completed: bool = False,
    db: Session = Depends(get_db),
):
    """
    Customers with vehicles and visit stats.

    search matches name, phone or any owned plate (case-insensitive);
    completed=true keeps only customers with at least one COMPLETED booking.
    """
    query = db.query(DBCustomers).options(
        selectinload(DBCustomers.vehicles),
        selectinload(DBCustomers.bookings),
    )

    if completed:
        query = query.filter(
            DBCustomers.bookings.any(DBBookings.status == COMPLETED)
        )

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                DBCustomers.name.ilike(pattern),
                DBCustomers.phone.ilike(pattern),
                DBCustomers.vehicles.any(DBVehicles.plate.ilike(pattern)),
            )
        )

    customers = query.order_by(DBCustomers.created_at.desc(), DBCustomers.id.desc()).all()
    return [_with_stats(c) for c in customers]


def _with_stats(customer: DBCustomers) -> dict:
    done = sorted(
        (b for b in customer.bookings if b.status == COMPLETED),
        key=lambda b: (b.date, b.time),
        reverse=True,
    )
    return {
        "id": customer.id,
        "name": customer.name,
        "phone": customer.phone,
        "created_at": customer.created_at,
        "vehicles": customer.vehicles,
        "completed_count": len(done),
        "total_spent": sum(b.total_price for b in done),
        "last_visit": done[0].date if done else None,
    }
