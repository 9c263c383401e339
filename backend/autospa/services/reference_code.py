# backend/autospa/services/reference_code.py

import secrets
import time

REFERENCE_PREFIX = "LAV"
_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_reference_code(now_ms: int | None = None) -> str:
    """
    Human-readable booking reference: LAV-<base36 ms timestamp>-<4 random>.

    Not unique by construction; the bookings.reference_code constraint
    catches the rare collision.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(4))
    return f"{REFERENCE_PREFIX}-{_to_base36(now_ms)}-{suffix}"
