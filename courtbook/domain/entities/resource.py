from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from enum import Enum


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, day: date) -> Weekday:
        return list(cls)[day.weekday()]


@dataclass(frozen=True)
class DayHours:
    is_open: bool
    open: time | None = None
    close: time | None = None

    def __post_init__(self) -> None:
        if not self.is_open:
            return
        if self.open is None or self.close is None:
            raise ValueError("Open days need both opening and closing times")
        if self.open >= self.close:
            raise ValueError(f"Opening time {self.open} must be before closing time {self.close}")

    @classmethod
    def closed(cls) -> DayHours:
        return cls(is_open=False)

    def contains(self, start: time, end: time) -> bool:
        """True when [start, end) lies inside the open hours."""
        if not self.is_open:
            return False
        return self.open <= start and end <= self.close


@dataclass(frozen=True)
class Resource:
    resource_id: str
    rate_per_hour: Decimal
    operating_hours: dict[Weekday, DayHours] = field(default_factory=dict)
    name: str = ""
    owner_id: str | None = None

    def hours_for(self, day: date) -> DayHours:
        # Missing weekdays count as closed.
        return self.operating_hours.get(Weekday.of(day), DayHours.closed())
