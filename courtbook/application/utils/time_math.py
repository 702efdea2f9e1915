from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal


MINUTES_PER_DAY = 24 * 60


def is_wall_clock_minute(value: time) -> bool:
    """Naive time that falls exactly on a minute."""
    return value.tzinfo is None and value.second == 0 and value.microsecond == 0


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> time:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    return time(hour=minutes // 60, minute=minutes % 60)


def whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


def minutes_between(start: time, end: time) -> int:
    return to_minutes(end) - to_minutes(start)


def hours_between(start: time, end: time) -> Decimal:
    return Decimal(minutes_between(start, end)) / Decimal(60)


def overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Half-open intervals [start_a, end_a) and [start_b, end_b) share an instant."""
    return start_a < end_b and end_a > start_b
