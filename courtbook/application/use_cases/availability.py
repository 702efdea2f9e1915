from __future__ import annotations

from datetime import date, time
from typing import Iterable

from courtbook.application.ports.booking_store import BookingStorePort
from courtbook.application.utils.time_math import overlaps
from courtbook.domain.entities.time_slot import AnnotatedSlot, TimeSlot
from courtbook.domain.state_machine import BLOCKING_STATUSES


class AvailabilityChecker:
    """
    Read-only overlap check against the booking store.
    The answer is advisory: only the store's atomic insert guarantees a slot.
    """

    def __init__(self, store: BookingStorePort) -> None:
        self._store = store

    def is_available(self, resource_id: str, booking_date: date, start: time, end: time) -> bool:
        if self._store.find_overlapping(resource_id, booking_date, start, end, BLOCKING_STATUSES):
            return False
        return not any(
            overlaps(block.start_time, block.end_time, start, end)
            for block in self._store.find_blocks(resource_id, booking_date)
        )

    def blocking_intervals(self, resource_id: str, booking_date: date) -> list[tuple[time, time]]:
        intervals = [
            (b.start_time, b.end_time)
            for b in self._store.find_by_day(resource_id, booking_date, BLOCKING_STATUSES)
        ]
        intervals.extend(
            (block.start_time, block.end_time)
            for block in self._store.find_blocks(resource_id, booking_date)
        )
        return intervals

    def annotate_slots(
        self,
        resource_id: str,
        booking_date: date,
        slots: Iterable[TimeSlot],
    ) -> list[AnnotatedSlot]:
        taken = self.blocking_intervals(resource_id, booking_date)
        return [
            slot.with_availability(
                not any(overlaps(start, end, slot.start, slot.end) for start, end in taken)
            )
            for slot in slots
        ]
