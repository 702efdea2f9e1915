"""
Booking status state machine.

    pending   -> confirmed | cancelled
    confirmed -> completed | cancelled
    cancelled, completed: terminal

Only pending and confirmed bookings hold their interval.
"""

from __future__ import annotations

from courtbook.domain.entities.booking import BookingStatus


ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

BLOCKING_STATUSES: frozenset[BookingStatus] = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def is_terminal(status: BookingStatus) -> bool:
    return not ALLOWED_TRANSITIONS.get(status)


def is_blocking(status: BookingStatus) -> bool:
    return status in BLOCKING_STATUSES
