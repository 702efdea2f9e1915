from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal


@dataclass(frozen=True)
class TimeSlot:
    start: time
    end: time
    duration_hours: Decimal

    def with_availability(self, available: bool) -> AnnotatedSlot:
        return AnnotatedSlot(
            start=self.start,
            end=self.end,
            duration_hours=self.duration_hours,
            available=available,
        )

    @property
    def label(self) -> str:
        return f"{self.start:%H:%M} - {self.end:%H:%M}"


@dataclass(frozen=True)
class AnnotatedSlot(TimeSlot):
    available: bool = True
