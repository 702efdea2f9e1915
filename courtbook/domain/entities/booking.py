from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from decimal import Decimal
from enum import Enum

from courtbook.domain.entities.pricing import AddOn


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Booking:
    id: str
    resource_id: str
    requester_id: str
    booking_date: date
    start_time: time
    end_time: time
    duration_hours: Decimal
    status: BookingStatus
    base_amount: Decimal
    additional_charges: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime
    add_ons: tuple[AddOn, ...] = ()
    discount_code: str | None = None
    cancellation_reason: str | None = None
    cancelled_by: str | None = None
    confirmed_at: datetime | None = None
    cancelled_at: datetime | None = None
    completed_at: datetime | None = None

    def ends_at(self, tz: tzinfo) -> datetime:
        return datetime.combine(self.booking_date, self.end_time, tzinfo=tz)

    def __str__(self) -> str:
        return (
            f"Booking {self.id} ({self.status.value}) "
            f"{self.resource_id} {self.booking_date} {self.start_time:%H:%M}-{self.end_time:%H:%M}"
        )
