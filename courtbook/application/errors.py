from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    PAST_DATE = "past_date"
    INVALID_DURATION = "invalid_duration"
    SLOT_UNAVAILABLE = "slot_unavailable"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID_TRANSITION = "invalid_transition"


@dataclass(frozen=True)
class BookingError:
    """Expected, recoverable failure of an engine operation."""

    kind: ErrorKind
    message: str
    fields: tuple[str, ...] = ()
