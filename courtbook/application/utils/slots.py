from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from courtbook.application.utils.time_math import from_minutes, to_minutes, whole_minutes
from courtbook.domain.entities.resource import DayHours
from courtbook.domain.entities.time_slot import TimeSlot


def generate_slots(day_hours: DayHours, granularity: timedelta = timedelta(hours=1)) -> list[TimeSlot]:
    """
    Consecutive slots of length `granularity` from opening time.
    A trailing interval shorter than `granularity` is dropped, not truncated.
    """
    step = whole_minutes(granularity)
    if step <= 0:
        raise ValueError(f"Slot granularity must be at least one minute, got {granularity}")
    if not day_hours.is_open:
        return []

    duration = Decimal(step) / Decimal(60)
    current = to_minutes(day_hours.open)
    close = to_minutes(day_hours.close)

    slots: list[TimeSlot] = []
    while current + step <= close:
        slots.append(
            TimeSlot(
                start=from_minutes(current),
                end=from_minutes(current + step),
                duration_hours=duration,
            )
        )
        current += step
    return slots
