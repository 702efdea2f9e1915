from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from courtbook.domain.entities.booking import Booking, BookingStatus


EARNING_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.COMPLETED)


@dataclass(frozen=True)
class BookingStats:
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    cancelled: int = 0
    completed: int = 0
    earnings: Decimal = Decimal("0.00")

    @classmethod
    def from_bookings(cls, bookings: Iterable[Booking]) -> BookingStats:
        counts = {status: 0 for status in BookingStatus}
        earnings = Decimal("0.00")
        for booking in bookings:
            counts[booking.status] += 1
            if booking.status in EARNING_STATUSES:
                earnings += booking.total_amount
        return cls(
            total=sum(counts.values()),
            pending=counts[BookingStatus.PENDING],
            confirmed=counts[BookingStatus.CONFIRMED],
            cancelled=counts[BookingStatus.CANCELLED],
            completed=counts[BookingStatus.COMPLETED],
            earnings=earnings,
        )
