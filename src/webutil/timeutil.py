"""Millisecond Unix timestamps."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

from .convs import parse_int

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def now_local_ms() -> int:
    return time.time_ns() // 1_000_000


def now_utc_ms() -> int:
    # A Unix timestamp has no zone, so this equals now_local_ms().
    return time.time_ns() // 1_000_000


def time_to_ms(when: datetime) -> int:
    """Milliseconds since the epoch; naive datetimes are taken as local time."""
    if when.tzinfo is None:
        when = when.astimezone()
    return (when - EPOCH) // _MILLISECOND


def ms_to_time(ms: str | int) -> datetime:
    """Parse a millisecond timestamp into an aware UTC datetime."""
    value = parse_int(ms) if isinstance(ms, str) else int(ms)
    try:
        return EPOCH + value * _MILLISECOND
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range: {ms!r}") from exc
