from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from courtbook.application.ports.notifier import NotifierPort
from courtbook.application.use_cases.booking_lifecycle import BookingLifecycleManager
from courtbook.domain.entities.booking import Booking, BookingStatus
from courtbook.domain.entities.lifecycle_event import LifecycleEvent
from courtbook.domain.entities.pricing import Discount
from courtbook.domain.entities.resource import DayHours, Resource, Weekday
from courtbook.infrastructure.auth.ownership_policy import OwnershipPolicy
from courtbook.infrastructure.catalog.discount_code_store import DiscountCodeStore
from courtbook.infrastructure.catalog.resource_catalog_store import ResourceCatalogStore
from courtbook.infrastructure.store.memory_store import MemoryBookingStore


TZ = ZoneInfo("UTC")
TODAY = date(2026, 10, 19)  # Monday
NEXT_MONDAY = date(2026, 10, 26)
NEXT_SUNDAY = date(2026, 10, 25)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingNotifier(NotifierPort):
    def __init__(self) -> None:
        self.events: list[LifecycleEvent] = []

    def emit(self, event: LifecycleEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [e.type.value for e in self.events]


def make_court(resource_id: str = "court-1", rate: str = "25.00") -> Resource:
    hours = {
        day: DayHours(is_open=True, open=time(8, 0), close=time(22, 0))
        for day in Weekday
        if day is not Weekday.SUNDAY
    }
    hours[Weekday.SUNDAY] = DayHours.closed()
    return Resource(
        resource_id=resource_id,
        name="Court A1",
        rate_per_hour=Decimal(rate),
        operating_hours=hours,
        owner_id="owner-1",
    )


def booking_request(start: str = "10:00", end: str = "12:00", **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "resource_id": "court-1",
        "requester_id": "user-1",
        "booking_date": NEXT_MONDAY.isoformat(),
        "start_time": start,
        "end_time": end,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 9, 0, tzinfo=TZ))


@pytest.fixture
def catalog() -> ResourceCatalogStore:
    return ResourceCatalogStore({"court-1": make_court("court-1"), "court-2": make_court("court-2", "40.00")})


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def discount_codes() -> DiscountCodeStore:
    return DiscountCodeStore(
        [
            Discount(code="SAVE10", amount=Decimal("10.00")),
            Discount(code="HALF", percent=Decimal("50")),
            Discount(code="FREEBIE", amount=Decimal("500.00")),
        ]
    )


@pytest.fixture
def manager(catalog, store, notifier, discount_codes, clock) -> BookingLifecycleManager:
    return BookingLifecycleManager(
        catalog=catalog,
        store=store,
        notifier=notifier,
        authorization=OwnershipPolicy(),
        timezone=TZ,
        discount_codes=discount_codes,
        clock=clock,
    )


def make_booking(
    booking_id: str,
    start: time,
    end: time,
    status: BookingStatus = BookingStatus.PENDING,
    resource_id: str = "court-1",
) -> Booking:
    hours = Decimal(end.hour - start.hour)
    created = datetime(2026, 10, 19, 9, 0, tzinfo=TZ)
    return Booking(
        id=booking_id,
        resource_id=resource_id,
        requester_id="user-1",
        booking_date=NEXT_MONDAY,
        start_time=start,
        end_time=end,
        duration_hours=hours,
        status=status,
        base_amount=Decimal("25.00") * hours,
        additional_charges=Decimal("0.00"),
        discount_amount=Decimal("0.00"),
        total_amount=Decimal("25.00") * hours,
        created_at=created,
        updated_at=created,
    )
