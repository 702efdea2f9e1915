from __future__ import annotations

from courtbook.domain.entities.lifecycle_event import EventType, LifecycleEvent


def compose_notification(event: LifecycleEvent) -> tuple[str, str]:
    """Title and body for a lifecycle event."""
    booking = event.booking
    venue = event.resource_name or booking.resource_id
    when = f"{booking.booking_date:%Y-%m-%d} {booking.start_time:%H:%M}-{booking.end_time:%H:%M}"

    if event.type is EventType.CREATED:
        return "Booking Created", f"Your booking at {venue} on {when} is pending confirmation."
    if event.type is EventType.CONFIRMED:
        return "Booking Confirmed", f"Your booking at {venue} has been confirmed for {when}."
    if event.type is EventType.CANCELLED:
        reason = f" Reason: {booking.cancellation_reason}" if booking.cancellation_reason else ""
        return "Booking Cancelled", f"Your booking at {venue} on {when} has been cancelled.{reason}"
    return "Booking Completed", f"Thanks for visiting {venue}! Please leave a review."
