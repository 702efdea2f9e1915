from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from courtbook.domain.entities.blocked_slot import BlockedSlot
from courtbook.domain.entities.booking import Booking, BookingStatus
from courtbook.domain.entities.pricing import AddOn


def _iso(value: date | time | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def booking_to_dict(booking: Booking) -> dict[str, Any]:
    """Serialize Booking to a JSON-compatible dict. Money is kept as strings."""
    return {
        "id": booking.id,
        "resource_id": booking.resource_id,
        "requester_id": booking.requester_id,
        "booking_date": booking.booking_date.isoformat(),
        "start_time": booking.start_time.isoformat(),
        "end_time": booking.end_time.isoformat(),
        "duration_hours": str(booking.duration_hours),
        "status": booking.status.value,
        "base_amount": str(booking.base_amount),
        "additional_charges": str(booking.additional_charges),
        "discount_amount": str(booking.discount_amount),
        "total_amount": str(booking.total_amount),
        "add_ons": [{"name": a.name, "amount": str(a.amount)} for a in booking.add_ons],
        "discount_code": booking.discount_code,
        "cancellation_reason": booking.cancellation_reason,
        "cancelled_by": booking.cancelled_by,
        "created_at": _iso(booking.created_at),
        "updated_at": _iso(booking.updated_at),
        "confirmed_at": _iso(booking.confirmed_at),
        "cancelled_at": _iso(booking.cancelled_at),
        "completed_at": _iso(booking.completed_at),
    }


def booking_from_dict(data: dict[str, Any]) -> Booking:
    return Booking(
        id=data["id"],
        resource_id=data["resource_id"],
        requester_id=data["requester_id"],
        booking_date=date.fromisoformat(data["booking_date"]),
        start_time=time.fromisoformat(data["start_time"]),
        end_time=time.fromisoformat(data["end_time"]),
        duration_hours=Decimal(data["duration_hours"]),
        status=BookingStatus(data["status"]),
        base_amount=Decimal(data["base_amount"]),
        additional_charges=Decimal(data["additional_charges"]),
        discount_amount=Decimal(data["discount_amount"]),
        total_amount=Decimal(data["total_amount"]),
        created_at=datetime.fromisoformat(data["created_at"]),
        updated_at=datetime.fromisoformat(data["updated_at"]),
        add_ons=tuple(
            AddOn(amount=Decimal(a["amount"]), name=a.get("name", "")) for a in data.get("add_ons", [])
        ),
        discount_code=data.get("discount_code"),
        cancellation_reason=data.get("cancellation_reason"),
        cancelled_by=data.get("cancelled_by"),
        confirmed_at=_parse_datetime(data.get("confirmed_at")),
        cancelled_at=_parse_datetime(data.get("cancelled_at")),
        completed_at=_parse_datetime(data.get("completed_at")),
    )


def block_to_dict(block: BlockedSlot) -> dict[str, Any]:
    return {
        "id": block.id,
        "resource_id": block.resource_id,
        "booking_date": block.booking_date.isoformat(),
        "start_time": block.start_time.isoformat(),
        "end_time": block.end_time.isoformat(),
        "created_at": block.created_at.isoformat(),
        "reason": block.reason,
        "blocked_by": block.blocked_by,
    }


def block_from_dict(data: dict[str, Any]) -> BlockedSlot:
    return BlockedSlot(
        id=data["id"],
        resource_id=data["resource_id"],
        booking_date=date.fromisoformat(data["booking_date"]),
        start_time=time.fromisoformat(data["start_time"]),
        end_time=time.fromisoformat(data["end_time"]),
        created_at=datetime.fromisoformat(data["created_at"]),
        reason=data.get("reason", ""),
        blocked_by=data.get("blocked_by"),
    )
