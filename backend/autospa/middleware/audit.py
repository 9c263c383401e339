# backend/autospa/middleware/audit.py
# one JSON line per request on "autospa.audit"; never touches the database
#
# Booking rejections (SLOT_FULL, SERVICE_NOT_FOUND, ...) and validation
# failures are logged with their error code, taken from request.state where
# the exception handlers in main.py leave it.

import json
import logging
import time

from fastapi import Request

logger = logging.getLogger("autospa.audit")


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or (request.client.host if request.client else None)


async def audit_middleware(request: Request, call_next):
    started = time.perf_counter()

    response = await call_next(request)

    record = {
        "method": request.method,
        "path": request.url.path,
        "query": str(request.url.query) or None,
        "status": response.status_code,
        "error_code": getattr(request.state, "error_code", None),
        "ip": client_ip(request),
        "ua": request.headers.get("User-Agent", ""),
        "duration_ms": round((time.perf_counter() - started) * 1000, 1),
    }

    if response.status_code >= 500:
        logger.warning(json.dumps(record, ensure_ascii=False))
    else:
        logger.info(json.dumps(record, ensure_ascii=False))

    return response
