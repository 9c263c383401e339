# backend/autospa/services/booking_allocator.py
"""
Booking allocation.

One unit of work per attempt:

  1. read capacity from the settings row
  2. count non-cancelled bookings on (date, time)
  3. reject with SLOT_FULL when count >= capacity
  4. load the service (SERVICE_NOT_FOUND if absent/inactive)
  5. resolve customer and vehicle
  6. take the lowest free seat in 1..capacity
  7. insert the PENDING booking with the service price snapshot
  8. commit

The (date, time, seat) unique constraint makes two writers that saw the
same occupancy collide on the same seat; the loser rolls back and re-runs
the whole unit, now observing the winner.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ..config import settings
from ..models import Bookings, BusinessSettings, Services
from .business_settings import SETTINGS_ID
from .identity import resolve_customer, resolve_vehicle
from .reference_code import generate_reference_code
from .slots.config import DEFAULT_MAX_SLOTS_PER_TIME

logger = logging.getLogger(__name__)

PENDING = "PENDING"
CANCELLED = "CANCELLED"


class BookingRejected(Exception):
    """Base for every non-success outcome of create_booking."""

    code = "BOOKING_REJECTED"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SlotFullError(BookingRejected):
    code = "SLOT_FULL"
    status_code = 409


class ServiceNotFoundError(BookingRejected):
    code = "SERVICE_NOT_FOUND"
    status_code = 404


class DuplicateReferenceError(BookingRejected):
    code = "DUPLICATE_REFERENCE"
    status_code = 409


class BookingPersistenceError(BookingRejected):
    """Retries exhausted; nothing was committed, safe to resubmit."""

    code = "PERSISTENCE_ERROR"
    status_code = 503


@dataclass
class CustomerInfo:
    name: str
    phone: str
    plate: str
    model: Optional[str] = None


@dataclass
class BookingRequest:
    date: date
    time: str
    service_id: int
    payment_method: str
    customer: CustomerInfo
    notes: Optional[str] = None
    reference_code: Optional[str] = None


def create_booking(
    db: Session,
    request: BookingRequest,
    max_attempts: int | None = None,
) -> Bookings:
    """
    Admit and persist a booking, or raise a BookingRejected subclass.

    The returned booking is committed. Any failure leaves nothing behind.

    max_attempts bounds transient database errors. A uniqueness conflict
    means a rival committed first, so it is retried outside that budget;
    at most `capacity` rivals can take a seat before the slot reports
    SLOT_FULL, which bounds those retries to capacity + max_attempts.
    """
    max_attempts = max_attempts or settings.booking_max_attempts
    reference_code = request.reference_code or generate_reference_code()
    code_regenerated = False
    failures = 0
    conflicts = 0
    capacity = DEFAULT_MAX_SLOTS_PER_TIME

    while True:
        try:
            capacity = _current_capacity(db)
            booking = _allocate(db, request, reference_code, capacity)
            db.commit()
        except BookingRejected as exc:
            db.rollback()
            logger.info(
                "Booking rejected: %s date=%s time=%s",
                exc.code, request.date, request.time,
            )
            raise
        except IntegrityError as exc:
            db.rollback()
            if _is_reference_conflict(exc):
                if request.reference_code:
                    raise DuplicateReferenceError(
                        f"Reference code {reference_code} is already in use"
                    ) from exc
                if code_regenerated:
                    raise BookingPersistenceError(
                        "Could not generate a unique reference code"
                    ) from exc
                code_regenerated = True
                reference_code = generate_reference_code()
                logger.warning("Reference code collision, regenerated as %s", reference_code)
                continue

            # Seat taken (or identity created) by a concurrent commit
            conflicts += 1
            if conflicts > capacity + max_attempts:
                raise BookingPersistenceError(
                    f"Booking for {request.date} {request.time} kept conflicting, please retry"
                ) from exc
            logger.info(
                "Concurrent write on %s %s, retrying (conflict %d)",
                request.date, request.time, conflicts,
            )
            continue
        except OperationalError as exc:
            db.rollback()
            failures += 1
            logger.warning(
                "Transient database error on %s %s (attempt %d/%d)",
                request.date, request.time, failures, max_attempts,
                exc_info=True,
            )
            if failures >= max_attempts:
                raise BookingPersistenceError(
                    f"Booking for {request.date} {request.time} could not be saved, please retry"
                ) from exc
            continue

        db.refresh(booking)
        logger.info(
            "Booking created: booking_id=%s ref=%s date=%s time=%s seat=%s",
            booking.id, booking.reference_code, booking.date, booking.time, booking.seat,
        )
        return booking


def _allocate(
    db: Session,
    request: BookingRequest,
    reference_code: str,
    capacity: int,
) -> Bookings:
    date_str = request.date.isoformat()

    # Steps 2-3: occupancy against the capacity read in this transaction
    taken = _taken_seats(db, date_str, request.time)
    if len(taken) >= capacity:
        raise SlotFullError(f"{date_str} {request.time} is no longer available")

    seat = next_free_seat(taken, capacity)
    if seat is None:
        raise SlotFullError(f"{date_str} {request.time} is no longer available")

    # Step 4
    service = db.get(Services, request.service_id)
    if service is None or not service.is_active:
        raise ServiceNotFoundError(f"Service {request.service_id} not found")

    # Step 5
    customer = resolve_customer(db, request.customer.phone, request.customer.name)
    vehicle = resolve_vehicle(db, request.customer.plate, request.customer.model, customer.id)

    # Steps 6-7
    booking = Bookings(
        reference_code=reference_code,
        date=date_str,
        time=request.time,
        seat=seat,
        status=PENDING,
        payment_method=request.payment_method,
        total_price=service.price,
        notes=request.notes,
        customer_id=customer.id,
        vehicle_id=vehicle.id,
        service_id=service.id,
    )
    db.add(booking)
    db.flush()
    return booking


def next_free_seat(taken: list[Optional[int]], capacity: int) -> Optional[int]:
    """Lowest seat number in 1..capacity not in taken."""
    used = set(taken)
    for seat in range(1, capacity + 1):
        if seat not in used:
            return seat
    return None


# ── Database helpers ─────────────────────────────────────────────────────


def _current_capacity(db: Session) -> int:
    # populate_existing: never trust a row loaded earlier in this session
    row = db.get(BusinessSettings, SETTINGS_ID, populate_existing=True)
    if row is None or row.max_slots_per_time is None:
        return DEFAULT_MAX_SLOTS_PER_TIME
    return row.max_slots_per_time


def _taken_seats(db: Session, date_str: str, time_str: str) -> list[Optional[int]]:
    """Seats of non-cancelled bookings on (date, time); one entry per booking."""
    rows = (
        db.query(Bookings.seat)
        .filter(
            Bookings.date == date_str,
            Bookings.time == time_str,
            Bookings.status != CANCELLED,
        )
        .all()
    )
    return [seat for (seat,) in rows]


def _is_reference_conflict(exc: IntegrityError) -> bool:
    return "reference_code" in str(exc.orig)
