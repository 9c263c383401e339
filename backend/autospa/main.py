import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from redis import Redis
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .middleware.audit import audit_middleware
from .redis_client import get_redis
from .routers import (
    availability,
    bookings,
    customers,
    payment_methods,
    services,
    settings as settings_router,
)
from .services.booking_allocator import BookingRejected

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AutoSpa Booking API")

app.middleware("http")(audit_middleware)

app.include_router(availability.router)
app.include_router(bookings.router)
app.include_router(services.router)
app.include_router(settings_router.router)
app.include_router(customers.router)
app.include_router(payment_methods.router)


@app.exception_handler(BookingRejected)
async def booking_rejected_handler(request: Request, exc: BookingRejected):
    request.state.error_code = exc.code
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    request.state.error_code = "VALIDATION_ERROR"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "code": "VALIDATION_ERROR",
        },
    )


@app.get("/health")
def health(
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    try:
        database_ok = db.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        database_ok = False

    redis_ok = None
    if redis is not None:
        try:
            redis_ok = bool(redis.ping())
        except RedisError:
            logger.exception("Health check: redis unreachable")
            redis_ok = False

    return {"database": database_ok, "redis": redis_ok}
