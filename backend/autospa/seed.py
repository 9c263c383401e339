# backend/autospa/seed.py
"""
Idempotent database bootstrap: tables, default settings, services and
payment methods. Existing rows are never overwritten.
"""

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .models import Base, PaymentMethods, Services
from .services.business_settings import get_or_create_settings

logger = logging.getLogger(__name__)

# name, price (PYG), duration in minutes
DEFAULT_SERVICES = (
    ("Lavado Express", 50000, 20),
    ("Lavado Completo", 100000, 45),
    ("Lavado Premium", 180000, 90),
)

DEFAULT_PAYMENT_METHODS = ("Efectivo", "Transferencia", "QR", "Link de Pago")


def create_tables(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def seed_services(db: Session) -> int:
    """Insert default services missing by name. Returns number created."""
    existing = {name for (name,) in db.query(Services.name).all()}
    created = 0
    for sort_order, (name, price, duration) in enumerate(DEFAULT_SERVICES, start=1):
        if name in existing:
            continue
        db.add(Services(name=name, price=price, duration_min=duration, sort_order=sort_order))
        created += 1
    db.commit()
    return created


def seed_payment_methods(db: Session) -> None:
    """Insert the default methods when the table is empty."""
    if db.query(PaymentMethods.id).first() is not None:
        return
    db.add_all(PaymentMethods(name=name) for name in DEFAULT_PAYMENT_METHODS)
    db.commit()


def seed_database(engine: Engine) -> None:
    create_tables(engine)
    with Session(engine) as db:
        get_or_create_settings(db)
        created = seed_services(db)
        seed_payment_methods(db)
    logger.info("Database ready (%d services created)", created)
