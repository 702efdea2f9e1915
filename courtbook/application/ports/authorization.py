from __future__ import annotations

from abc import ABC, abstractmethod

from courtbook.domain.entities.actor import Actor
from courtbook.domain.entities.booking import Booking, BookingStatus
from courtbook.domain.entities.resource import Resource


class AuthorizationPort(ABC):
    @abstractmethod
    def can_update_status(
        self,
        actor: Actor,
        booking: Booking,
        resource: Resource | None,
        new_status: BookingStatus,
    ) -> bool:
        raise NotImplementedError

    @abstractmethod
    def can_block(self, actor: Actor, resource: Resource) -> bool:
        raise NotImplementedError
