from __future__ import annotations

from datetime import date
from typing import Iterable

from courtbook.application.exceptions import BookingConflictError, BookingNotFoundError
from courtbook.application.ports.booking_store import BookingStorePort
from courtbook.application.utils.keyed_lock import KeyedLocks
from courtbook.application.utils.time_math import overlaps
from courtbook.domain.entities.blocked_slot import BlockedSlot
from courtbook.domain.entities.booking import Booking, BookingStatus
from courtbook.domain.state_machine import is_blocking


DayKey = tuple[str, date]


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}
        self._by_day: dict[DayKey, list[str]] = {}
        self._blocks: dict[DayKey, list[BlockedSlot]] = {}
        self._day_locks = KeyedLocks()

    def get(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    def find_by_day(
        self,
        resource_id: str,
        booking_date: date,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        key = (resource_id, booking_date)
        wanted = set(statuses) if statuses is not None else None
        with self._day_locks.hold(key):
            bookings = [self._bookings[booking_id] for booking_id in self._by_day.get(key, [])]
        return [b for b in bookings if wanted is None or b.status in wanted]

    def insert_if_available(self, booking: Booking) -> Booking:
        key = (booking.resource_id, booking.booking_date)
        with self._day_locks.hold(key):
            for booking_id in self._by_day.get(key, []):
                other = self._bookings[booking_id]
                if is_blocking(other.status) and overlaps(
                    other.start_time, other.end_time, booking.start_time, booking.end_time
                ):
                    raise BookingConflictError(f"Booking {booking.id} overlaps booking {other.id}")
            for block in self._blocks.get(key, []):
                if overlaps(block.start_time, block.end_time, booking.start_time, booking.end_time):
                    raise BookingConflictError(f"Booking {booking.id} overlaps blocked slot {block.id}")

            self._bookings[booking.id] = booking
            self._by_day.setdefault(key, []).append(booking.id)
        return booking

    def update(self, booking: Booking) -> Booking:
        key = (booking.resource_id, booking.booking_date)
        with self._day_locks.hold(key):
            if booking.id not in self._bookings:
                raise BookingNotFoundError(f"Booking {booking.id} not found")
            self._bookings[booking.id] = booking
        return booking

    def list_bookings(
        self,
        requester_id: str | None = None,
        resource_id: str | None = None,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        wanted = set(statuses) if statuses is not None else None
        return [
            b
            for b in list(self._bookings.values())
            if (requester_id is None or b.requester_id == requester_id)
            and (resource_id is None or b.resource_id == resource_id)
            and (wanted is None or b.status in wanted)
        ]

    def add_block(self, block: BlockedSlot) -> BlockedSlot:
        key = (block.resource_id, block.booking_date)
        with self._day_locks.hold(key):
            self._blocks.setdefault(key, []).append(block)
        return block

    def find_blocks(self, resource_id: str, booking_date: date) -> list[BlockedSlot]:
        key = (resource_id, booking_date)
        with self._day_locks.hold(key):
            return list(self._blocks.get(key, []))
