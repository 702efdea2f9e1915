from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from courtbook.domain.entities.booking import Booking, BookingStatus


class EventType(str, Enum):
    CREATED = "created"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @classmethod
    def for_status(cls, status: BookingStatus) -> EventType:
        if status is BookingStatus.PENDING:
            return cls.CREATED
        return cls(status.value)


@dataclass(frozen=True)
class LifecycleEvent:
    type: EventType
    booking: Booking
    occurred_at: datetime
    resource_name: str | None = None
