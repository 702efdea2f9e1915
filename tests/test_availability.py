"""
Tests for overlap detection and the availability checker.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, time

from conftest import NEXT_MONDAY, TZ, make_booking
from courtbook.application.use_cases.availability import AvailabilityChecker
from courtbook.application.utils.slots import generate_slots
from courtbook.application.utils.time_math import overlaps
from courtbook.domain.entities.blocked_slot import BlockedSlot
from courtbook.domain.entities.booking import BookingStatus
from courtbook.domain.entities.resource import DayHours
from courtbook.infrastructure.store.memory_store import MemoryBookingStore


CREATED = datetime(2026, 10, 19, 9, 0, tzinfo=TZ)


def test_overlap_is_half_open():
    assert overlaps(time(10), time(12), time(11), time(13))
    assert overlaps(time(10), time(12), time(9), time(15))
    assert not overlaps(time(10), time(12), time(12), time(13))
    assert not overlaps(time(10), time(12), time(8), time(10))


def test_pending_and_confirmed_bookings_block():
    store = MemoryBookingStore()
    store.insert_if_available(make_booking("a", time(10), time(11)))
    store.insert_if_available(make_booking("b", time(14), time(15), BookingStatus.CONFIRMED))
    checker = AvailabilityChecker(store)

    assert not checker.is_available("court-1", NEXT_MONDAY, time(10, 30), time(11, 30))
    assert not checker.is_available("court-1", NEXT_MONDAY, time(14), time(16))
    assert checker.is_available("court-1", NEXT_MONDAY, time(11), time(14))
    assert checker.is_available("court-2", NEXT_MONDAY, time(10), time(11))


def test_cancelled_and_completed_bookings_do_not_block():
    store = MemoryBookingStore()
    store.insert_if_available(make_booking("a", time(10), time(11)))
    store.update(replace(store.get("a"), status=BookingStatus.CANCELLED))
    store.insert_if_available(make_booking("b", time(12), time(13), BookingStatus.CONFIRMED))
    store.update(replace(store.get("b"), status=BookingStatus.COMPLETED))
    checker = AvailabilityChecker(store)

    assert checker.is_available("court-1", NEXT_MONDAY, time(10), time(11))
    assert checker.is_available("court-1", NEXT_MONDAY, time(12), time(13))


def test_blocked_slot_makes_interval_unavailable():
    store = MemoryBookingStore()
    store.add_block(
        BlockedSlot(
            id="m1",
            resource_id="court-1",
            booking_date=NEXT_MONDAY,
            start_time=time(16),
            end_time=time(18),
            created_at=CREATED,
            reason="resurfacing",
        )
    )
    checker = AvailabilityChecker(store)

    assert not checker.is_available("court-1", NEXT_MONDAY, time(17), time(19))
    assert checker.is_available("court-1", NEXT_MONDAY, time(18), time(19))


def test_annotate_slots_flags_taken_hours():
    store = MemoryBookingStore()
    store.insert_if_available(make_booking("a", time(9), time(10)))
    checker = AvailabilityChecker(store)
    slots = generate_slots(DayHours(is_open=True, open=time(8), close=time(11)))

    annotated = checker.annotate_slots("court-1", NEXT_MONDAY, slots)

    assert [(s.start, s.available) for s in annotated] == [
        (time(8), True),
        (time(9), False),
        (time(10), True),
    ]
