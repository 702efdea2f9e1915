from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Mapping
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from courtbook.application.dto.booking_request import BookingRequestDTO
from courtbook.application.errors import BookingError, ErrorKind
from courtbook.application.exceptions import BookingConflictError, ResourceNotFoundError
from courtbook.application.ports.authorization import AuthorizationPort
from courtbook.application.ports.booking_store import BookingStorePort
from courtbook.application.ports.discount_codes import DiscountCodePort
from courtbook.application.ports.notifier import NotifierPort
from courtbook.application.ports.resource_catalog import ResourceCatalogPort
from courtbook.application.use_cases.availability import AvailabilityChecker
from courtbook.application.utils.keyed_lock import KeyedLocks
from courtbook.application.utils.pricing import price
from courtbook.application.utils.slots import generate_slots
from courtbook.application.utils.time_math import (
    hours_between,
    is_wall_clock_minute,
    minutes_between,
    whole_minutes,
)
from courtbook.domain.entities.actor import SYSTEM_ACTOR, Actor
from courtbook.domain.entities.blocked_slot import BlockedSlot
from courtbook.domain.entities.booking import Booking, BookingStatus
from courtbook.domain.entities.booking_stats import BookingStats
from courtbook.domain.entities.lifecycle_event import EventType, LifecycleEvent
from courtbook.domain.entities.pricing import Discount
from courtbook.domain.entities.resource import Resource
from courtbook.domain.entities.time_slot import AnnotatedSlot
from courtbook.domain.state_machine import can_transition, is_terminal


@dataclass(frozen=True)
class Outcome:
    error: BookingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BookingOutcome(Outcome):
    booking: Booking | None = None


@dataclass(frozen=True)
class BookingListOutcome(Outcome):
    bookings: list[Booking] = field(default_factory=list)


@dataclass(frozen=True)
class SlotsOutcome(Outcome):
    slots: list[AnnotatedSlot] = field(default_factory=list)


@dataclass(frozen=True)
class BlockOutcome(Outcome):
    block: BlockedSlot | None = None


class BookingLifecycleManager:
    """
    Creates bookings and moves them through their status lifecycle.

    Business failures come back as outcomes carrying an ErrorKind.
    Infrastructure failures raised by the store or catalog propagate
    unchanged and are never retried here.
    """

    def __init__(
        self,
        catalog: ResourceCatalogPort,
        store: BookingStorePort,
        notifier: NotifierPort,
        authorization: AuthorizationPort,
        timezone: ZoneInfo,
        discount_codes: DiscountCodePort | None = None,
        min_duration: timedelta = timedelta(hours=1),
        billing_granularity: timedelta = timedelta(minutes=30),
        slot_granularity: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._notifier = notifier
        self._authorization = authorization
        self._timezone = timezone
        self._discount_codes = discount_codes
        self._min_minutes = whole_minutes(min_duration)
        self._billing_minutes = whole_minutes(billing_granularity)
        self._slot_granularity = slot_granularity
        self._clock = clock or (lambda: datetime.now(timezone))
        self._availability = AvailabilityChecker(store)
        self._booking_locks = KeyedLocks()
        self._logger = logging.getLogger(__name__)

        if self._billing_minutes <= 0:
            raise ValueError(f"Billing granularity must be at least one minute, got {billing_granularity}")

    def create(self, request: BookingRequestDTO | Mapping[str, Any]) -> BookingOutcome:
        if isinstance(request, BookingRequestDTO):
            dto = request
        else:
            try:
                dto = BookingRequestDTO.model_validate(request)
            except ValidationError as e:
                fields = tuple(sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()}))
                return BookingOutcome(
                    error=self._error(
                        ErrorKind.VALIDATION,
                        f"Invalid booking request fields: {', '.join(fields)}",
                        fields=fields,
                    )
                )

        now = self._now()
        if dto.booking_date < now.date():
            return BookingOutcome(
                error=self._error(ErrorKind.PAST_DATE, f"Cannot book {dto.booking_date}: date is in the past")
            )

        duration_error = self._check_duration(dto.start_time, dto.end_time)
        if duration_error:
            return BookingOutcome(error=duration_error)

        try:
            resource = self._catalog.get_resource(dto.resource_id)
        except ResourceNotFoundError:
            return BookingOutcome(
                error=self._error(
                    ErrorKind.NOT_FOUND,
                    f"Resource {dto.resource_id} not found",
                    resource_id=dto.resource_id,
                )
            )

        context = {"resource_id": resource.resource_id, "date": dto.booking_date.isoformat()}
        if not resource.hours_for(dto.booking_date).contains(dto.start_time, dto.end_time):
            return BookingOutcome(
                error=self._error(
                    ErrorKind.SLOT_UNAVAILABLE,
                    "Selected time is outside the resource's operating hours",
                    **context,
                )
            )
        if not self._availability.is_available(resource.resource_id, dto.booking_date, dto.start_time, dto.end_time):
            return BookingOutcome(
                error=self._error(ErrorKind.SLOT_UNAVAILABLE, "Selected time slot is not available", **context)
            )

        discount: Discount | None = None
        if dto.discount_code:
            discount = self._resolve_discount(dto.discount_code)
            if discount is None:
                return BookingOutcome(
                    error=self._error(
                        ErrorKind.VALIDATION,
                        f"Unknown discount code: {dto.discount_code}",
                        fields=("discount_code",),
                    )
                )

        duration = hours_between(dto.start_time, dto.end_time)
        add_ons = dto.to_add_ons()
        try:
            quote = price(resource, duration, add_ons, discount)
        except ValueError as e:
            return BookingOutcome(error=self._error(ErrorKind.VALIDATION, str(e), fields=("add_ons",)))

        booking = Booking(
            id=uuid.uuid4().hex,
            resource_id=resource.resource_id,
            requester_id=dto.requester_id,
            booking_date=dto.booking_date,
            start_time=dto.start_time,
            end_time=dto.end_time,
            duration_hours=duration,
            status=BookingStatus.PENDING,
            base_amount=quote.base_amount,
            additional_charges=quote.additional_charges,
            discount_amount=quote.discount_amount,
            total_amount=quote.total_amount,
            created_at=now,
            updated_at=now,
            add_ons=add_ons,
            discount_code=dto.discount_code,
        )

        try:
            stored = self._store.insert_if_available(booking)
        except BookingConflictError:
            # Lost the race between the advisory check and the insert.
            return BookingOutcome(
                error=self._error(ErrorKind.SLOT_UNAVAILABLE, "Selected time slot was just taken", **context)
            )

        self._logger.info(
            "Booking created",
            extra={"booking_id": stored.id, "status": stored.status.value, **context},
        )
        self._emit(stored, EventType.CREATED, now, resource)
        return BookingOutcome(booking=stored)

    def update_status(
        self,
        booking_id: str,
        new_status: BookingStatus | str,
        actor: Actor,
        reason: str | None = None,
    ) -> BookingOutcome:
        try:
            target = BookingStatus(new_status)
        except ValueError:
            return BookingOutcome(
                error=self._error(ErrorKind.VALIDATION, f"Unknown booking status: {new_status}", fields=("status",))
            )

        with self._booking_locks.hold(booking_id):
            booking = self._store.get(booking_id)
            if booking is None:
                return BookingOutcome(
                    error=self._error(ErrorKind.NOT_FOUND, f"Booking {booking_id} not found", booking_id=booking_id)
                )

            resource = self._find_resource(booking.resource_id)
            if not self._authorization.can_update_status(actor, booking, resource, target):
                return BookingOutcome(
                    error=self._error(
                        ErrorKind.UNAUTHORIZED,
                        "Not authorized to update this booking",
                        booking_id=booking_id,
                    )
                )

            if not can_transition(booking.status, target):
                message = (
                    f"Booking is already {booking.status.value}"
                    if is_terminal(booking.status)
                    else f"Cannot change status from {booking.status.value} to {target.value}"
                )
                return BookingOutcome(
                    error=self._error(
                        ErrorKind.INVALID_TRANSITION,
                        message,
                        booking_id=booking_id,
                    )
                )

            now = self._now()
            stored = self._store.update(self._apply_status(booking, target, actor, reason, now))

        self._logger.info(
            "Booking status updated",
            extra={"booking_id": stored.id, "status": stored.status.value, "reason": reason},
        )
        self._emit(stored, EventType.for_status(target), now, resource)
        return BookingOutcome(booking=stored)

    def get_available_slots(self, resource_id: str, booking_date: date) -> SlotsOutcome:
        try:
            resource = self._catalog.get_resource(resource_id)
        except ResourceNotFoundError:
            return SlotsOutcome(
                error=self._error(ErrorKind.NOT_FOUND, f"Resource {resource_id} not found", resource_id=resource_id)
            )

        slots = generate_slots(resource.hours_for(booking_date), self._slot_granularity)
        return SlotsOutcome(slots=self._availability.annotate_slots(resource_id, booking_date, slots))

    def get_booking(self, booking_id: str) -> BookingOutcome:
        booking = self._store.get(booking_id)
        if booking is None:
            return BookingOutcome(
                error=self._error(ErrorKind.NOT_FOUND, f"Booking {booking_id} not found", booking_id=booking_id)
            )
        return BookingOutcome(booking=booking)

    def list_bookings(
        self,
        requester_id: str | None = None,
        resource_id: str | None = None,
        status: BookingStatus | str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> BookingListOutcome:
        """Newest first by date and start time."""
        statuses = None
        if status:
            try:
                statuses = [BookingStatus(status)]
            except ValueError:
                return BookingListOutcome(
                    error=self._error(ErrorKind.VALIDATION, f"Unknown booking status: {status}", fields=("status",))
                )

        bookings = self._store.list_bookings(requester_id=requester_id, resource_id=resource_id, statuses=statuses)
        bookings.sort(key=lambda b: (b.booking_date, b.start_time), reverse=True)
        return BookingListOutcome(bookings=bookings[offset : offset + limit])

    def booking_stats(self, requester_id: str | None = None, resource_id: str | None = None) -> BookingStats:
        return BookingStats.from_bookings(
            self._store.list_bookings(requester_id=requester_id, resource_id=resource_id)
        )

    def block_slot(
        self,
        resource_id: str,
        booking_date: date,
        start: time,
        end: time,
        actor: Actor,
        reason: str = "",
    ) -> BlockOutcome:
        now = self._now()
        if booking_date < now.date():
            return BlockOutcome(
                error=self._error(ErrorKind.PAST_DATE, f"Cannot block {booking_date}: date is in the past")
            )
        if not (is_wall_clock_minute(start) and is_wall_clock_minute(end)):
            return BlockOutcome(
                error=self._error(
                    ErrorKind.VALIDATION,
                    "Block times must be HH:MM local time without seconds or UTC offset",
                    fields=("start_time", "end_time"),
                )
            )
        if start >= end:
            return BlockOutcome(error=self._error(ErrorKind.INVALID_DURATION, "End time must be after start time"))

        try:
            resource = self._catalog.get_resource(resource_id)
        except ResourceNotFoundError:
            return BlockOutcome(
                error=self._error(ErrorKind.NOT_FOUND, f"Resource {resource_id} not found", resource_id=resource_id)
            )

        if not self._authorization.can_block(actor, resource):
            return BlockOutcome(
                error=self._error(ErrorKind.UNAUTHORIZED, "Not authorized to block this resource", resource_id=resource_id)
            )

        block = self._store.add_block(
            BlockedSlot(
                id=uuid.uuid4().hex,
                resource_id=resource_id,
                booking_date=booking_date,
                start_time=start,
                end_time=end,
                created_at=now,
                reason=reason,
                blocked_by=actor.id,
            )
        )
        self._logger.info(
            "Time slot blocked",
            extra={"resource_id": resource_id, "date": booking_date.isoformat(), "reason": reason},
        )
        return BlockOutcome(block=block)

    def complete_elapsed(self, now: datetime | None = None) -> list[Booking]:
        """Mark confirmed bookings whose end has passed as completed. `now` must be timezone-aware."""
        cutoff = now or self._now()
        completed: list[Booking] = []
        for booking in self._store.list_bookings(statuses=[BookingStatus.CONFIRMED]):
            if booking.ends_at(self._timezone) > cutoff:
                continue
            outcome = self.update_status(booking.id, BookingStatus.COMPLETED, SYSTEM_ACTOR)
            if outcome.ok:
                completed.append(outcome.booking)
        return completed

    def _check_duration(self, start: time, end: time) -> BookingError | None:
        minutes = minutes_between(start, end)
        if minutes <= 0:
            return self._error(ErrorKind.INVALID_DURATION, "End time must be after start time")
        if minutes < self._min_minutes:
            return self._error(
                ErrorKind.INVALID_DURATION,
                f"Minimum booking duration is {self._min_minutes} minutes, got {minutes}",
            )
        if minutes % self._billing_minutes:
            return self._error(
                ErrorKind.INVALID_DURATION,
                f"Duration must be a multiple of {self._billing_minutes} minutes, got {minutes}",
            )
        return None

    def _resolve_discount(self, code: str) -> Discount | None:
        if self._discount_codes is None:
            return None
        return self._discount_codes.resolve(code)

    def _find_resource(self, resource_id: str) -> Resource | None:
        try:
            return self._catalog.get_resource(resource_id)
        except ResourceNotFoundError:
            return None

    def _apply_status(
        self,
        booking: Booking,
        target: BookingStatus,
        actor: Actor,
        reason: str | None,
        now: datetime,
    ) -> Booking:
        changes: dict[str, Any] = {"status": target, "updated_at": now}
        if target is BookingStatus.CONFIRMED:
            changes["confirmed_at"] = now
        elif target is BookingStatus.CANCELLED:
            changes["cancelled_at"] = now
            changes["cancellation_reason"] = reason
            changes["cancelled_by"] = actor.id
        elif target is BookingStatus.COMPLETED:
            changes["completed_at"] = now
        return replace(booking, **changes)

    def _emit(self, booking: Booking, event_type: EventType, now: datetime, resource: Resource | None) -> None:
        event = LifecycleEvent(
            type=event_type,
            booking=booking,
            occurred_at=now,
            resource_name=resource.name if resource and resource.name else None,
        )
        try:
            self._notifier.emit(event)
        except Exception as e:
            # Notification is fire-and-forget; the state change stands.
            self._logger.exception(
                "Lifecycle notification failed",
                extra={"booking_id": booking.id, "event": event_type.value, "reason": str(e)},
            )

    def _error(self, kind: ErrorKind, message: str, fields: tuple[str, ...] = (), **context: Any) -> BookingError:
        self._logger.info("Booking operation rejected", extra={"kind": kind.value, "reason": message, **context})
        return BookingError(kind=kind, message=message, fields=fields)

    def _now(self) -> datetime:
        return self._clock().astimezone(self._timezone)
