"""Shared test fixtures and helpers."""

from datetime import date
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from autospa.database import create_db_engine, get_db
from autospa.main import app
from autospa.models import Base, Bookings, BusinessSettings, Services
from autospa.redis_client import get_redis
from autospa.services.booking_allocator import BookingRequest, CustomerInfo, create_booking

ALL_DAYS = "0,1,2,3,4,5,6"
BOOKING_DATE = date(2030, 3, 4)


class StubRedis:
    """Dict-backed stand-in for the few Redis calls the settings cache uses."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed

    def ping(self):
        return True


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(engine):
    # Attributes stay loaded after commit, so seeding helpers leave no
    # transaction open that would hold the SQLite write lock.
    session = Session(bind=engine, autoflush=False, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def stub_redis():
    return StubRedis()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: None
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_settings(db, **overrides) -> BusinessSettings:
    """Create (or replace) the "main" settings row."""
    values = {
        "open_time": "08:00",
        "close_time": "10:00",
        "slot_duration": 30,
        "max_slots_per_time": 1,
        "working_days": ALL_DAYS,
        "booking_buffer_minutes": 10,
        "timezone": "UTC",
    }
    values.update(overrides)

    row = db.get(BusinessSettings, "main")
    if row is None:
        row = BusinessSettings(id="main", **values)
        db.add(row)
    else:
        for field, value in values.items():
            setattr(row, field, value)
    db.commit()
    return row


def make_service(
    db,
    name: str = "Lavado Completo",
    price: int = 100000,
    duration_min: int = 45,
    is_active: int = 1,
) -> Services:
    service = Services(name=name, price=price, duration_min=duration_min, is_active=is_active)
    db.add(service)
    db.commit()
    return service


def make_request(
    service_id: int,
    time: str = "09:00",
    target_date: date = BOOKING_DATE,
    phone: str = "0981 123 456",
    plate: str = "ABC 123",
    name: str = "Juan Perez",
    model: Optional[str] = "Toyota Corolla",
    reference_code: Optional[str] = None,
) -> BookingRequest:
    return BookingRequest(
        date=target_date,
        time=time,
        service_id=service_id,
        payment_method="CASH",
        customer=CustomerInfo(name=name, phone=phone, plate=plate, model=model),
        reference_code=reference_code,
    )


def booking_payload(service_id: int, **overrides) -> dict:
    payload = {
        "date": BOOKING_DATE.isoformat(),
        "time": "09:00",
        "service_id": service_id,
        "payment_method": "CASH",
        "customer": {
            "name": "Juan Perez",
            "phone": "0981 123 456",
            "plate": "ABC 123",
            "model": "Toyota Corolla",
        },
        "notes": "Interior too",
    }
    payload.update(overrides)
    return payload


def seed_booking(db, service_id: int, status: str | None = None, **request_kwargs) -> Bookings:
    """Create a booking directly and end the session's transaction."""
    booking = create_booking(db, make_request(service_id, **request_kwargs))
    if status is not None:
        booking.status = status
        if status == "CANCELLED":
            booking.seat = None
    db.commit()
    return booking
