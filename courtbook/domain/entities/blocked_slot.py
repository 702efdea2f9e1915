from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time


@dataclass(frozen=True)
class BlockedSlot:
    """Maintenance window declared by the resource owner; blocks bookings like an active booking."""

    id: str
    resource_id: str
    booking_date: date
    start_time: time
    end_time: time
    created_at: datetime
    reason: str = ""
    blocked_by: str | None = None
