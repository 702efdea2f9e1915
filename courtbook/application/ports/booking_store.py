from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, time
from typing import Iterable

from courtbook.application.utils.time_math import overlaps
from courtbook.domain.entities.blocked_slot import BlockedSlot
from courtbook.domain.entities.booking import Booking, BookingStatus


class BookingStorePort(ABC):
    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_day(
        self,
        resource_id: str,
        booking_date: date,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        """Bookings on (resource_id, booking_date), optionally restricted to `statuses`."""
        raise NotImplementedError

    @abstractmethod
    def insert_if_available(self, booking: Booking) -> Booking:
        """
        Insert `booking` only if it overlaps no pending/confirmed booking
        and no blocked slot on the same resource and date.
        Check and insert form one atomic unit per (resource_id, booking_date).
        Raises BookingConflictError otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, booking: Booking) -> Booking:
        """Replace the stored booking with the same id. Raises BookingNotFoundError if absent."""
        raise NotImplementedError

    @abstractmethod
    def list_bookings(
        self,
        requester_id: str | None = None,
        resource_id: str | None = None,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def add_block(self, block: BlockedSlot) -> BlockedSlot:
        raise NotImplementedError

    @abstractmethod
    def find_blocks(self, resource_id: str, booking_date: date) -> list[BlockedSlot]:
        raise NotImplementedError

    def find_overlapping(
        self,
        resource_id: str,
        booking_date: date,
        start: time,
        end: time,
        statuses: Iterable[BookingStatus],
    ) -> list[Booking]:
        return [
            b
            for b in self.find_by_day(resource_id, booking_date, statuses)
            if overlaps(b.start_time, b.end_time, start, end)
        ]
