from __future__ import annotations

from courtbook.application.ports.authorization import AuthorizationPort
from courtbook.domain.entities.actor import Actor, ActorRole
from courtbook.domain.entities.booking import Booking, BookingStatus
from courtbook.domain.entities.resource import Resource


PRIVILEGED_ROLES = {ActorRole.ADMIN, ActorRole.SYSTEM}


class OwnershipPolicy(AuthorizationPort):
    """
    Admins and the system may do anything. The resource owner may move
    its bookings through any transition. The requester may only cancel.
    """

    def can_update_status(
        self,
        actor: Actor,
        booking: Booking,
        resource: Resource | None,
        new_status: BookingStatus,
    ) -> bool:
        if actor.role in PRIVILEGED_ROLES:
            return True
        if self._owns(actor, resource):
            return True
        return actor.id == booking.requester_id and new_status is BookingStatus.CANCELLED

    def can_block(self, actor: Actor, resource: Resource) -> bool:
        return actor.role in PRIVILEGED_ROLES or self._owns(actor, resource)

    def _owns(self, actor: Actor, resource: Resource | None) -> bool:
        return resource is not None and resource.owner_id is not None and resource.owner_id == actor.id
