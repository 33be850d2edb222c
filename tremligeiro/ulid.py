"""Time-ordered identifiers carried as UUIDs."""

from __future__ import annotations

import secrets
import time
import uuid

_TIMESTAMP_MASK = (1 << 48) - 1


def new_ulid() -> uuid.UUID:
    """Return a new ULID (48-bit millisecond time, 80 random bits) as a UUID."""
    millis = (time.time_ns() // 1_000_000) & _TIMESTAMP_MASK
    return uuid.UUID(bytes=millis.to_bytes(6, "big") + secrets.token_bytes(10))


def ulid_from_string(value: str) -> uuid.UUID:
    """Parse the textual UUID form of an identifier; raises ValueError if invalid."""
    return uuid.UUID(value)