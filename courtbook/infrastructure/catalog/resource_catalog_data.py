from __future__ import annotations

from datetime import time
from decimal import Decimal

from courtbook.domain.entities.resource import DayHours, Resource, Weekday


def _every_day(open_at: time, close_at: time) -> dict[Weekday, DayHours]:
    return {day: DayHours(is_open=True, open=open_at, close=close_at) for day in Weekday}


RESOURCE_CATALOG: dict[str, Resource] = {
    "court-a1": Resource(
        resource_id="court-a1",
        name="Court A1",
        rate_per_hour=Decimal("25.00"),
        operating_hours=_every_day(time(8, 0), time(22, 0)),
        owner_id="owner-1",
    ),
    "court-a2": Resource(
        resource_id="court-a2",
        name="Court A2",
        rate_per_hour=Decimal("25.00"),
        operating_hours={
            **_every_day(time(8, 0), time(22, 0)),
            Weekday.SUNDAY: DayHours.closed(),
        },
        owner_id="owner-1",
    ),
    "premium-court-1": Resource(
        resource_id="premium-court-1",
        name="Premium Court 1",
        rate_per_hour=Decimal("40.00"),
        operating_hours=_every_day(time(6, 0), time(23, 0)),
        owner_id="owner-2",
    ),
}
