# backend/autospa/services/identity.py
"""
Customer / vehicle identity resolution.

At most one Customer per phone and one Vehicle per plate. Both resolvers
flush but never commit: they run inside the caller's unit of work.
"""

import logging
import re
from typing import Optional

from sqlalchemy.orm import Session

from ..models import Customers, Vehicles

logger = logging.getLogger(__name__)


def normalize_phone(value: str) -> str:
    """Keep digits and a leading +, e.g. "+595 (991) 234-567" -> "+595991234567"."""
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"\D", "", value[1:])
    return re.sub(r"\D", "", value)


def normalize_plate(value: str) -> str:
    """Upper-case and drop whitespace/dashes, e.g. "abc 123" -> "ABC123"."""
    return re.sub(r"[\s\-]", "", value).upper()


def resolve_customer(db: Session, phone: str, name: str) -> Customers:
    """Find customer by phone (creating if absent) and store the latest name."""
    phone = normalize_phone(phone)
    customer = db.query(Customers).filter(Customers.phone == phone).first()

    if customer is None:
        customer = Customers(phone=phone, name=name)
        db.add(customer)
        db.flush()
        logger.info("Customer created: customer_id=%s phone=%s", customer.id, phone)
        return customer

    if customer.name != name:
        customer.name = name
        db.flush()
    return customer


def resolve_vehicle(
    db: Session,
    plate: str,
    model: Optional[str],
    customer_id: int,
) -> Vehicles:
    """Find vehicle by plate (creating if absent), update model and owner."""
    plate = normalize_plate(plate)
    vehicle = db.query(Vehicles).filter(Vehicles.plate == plate).first()

    if vehicle is None:
        vehicle = Vehicles(plate=plate, model=model, customer_id=customer_id)
        db.add(vehicle)
        db.flush()
        logger.info("Vehicle created: vehicle_id=%s plate=%s", vehicle.id, plate)
        return vehicle

    vehicle.model = model
    assign_vehicle_owner(vehicle, customer_id)
    db.flush()
    return vehicle


def assign_vehicle_owner(vehicle: Vehicles, customer_id: int) -> None:
    """
    Ownership policy for a plate seen under another customer.

    Last booking wins: the vehicle moves to the customer booking now.
    """
    if vehicle.customer_id != customer_id:
        logger.info(
            "Vehicle %s reassigned from customer %s to %s",
            vehicle.plate, vehicle.customer_id, customer_id,
        )
        vehicle.customer_id = customer_id
