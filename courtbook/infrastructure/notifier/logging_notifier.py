from __future__ import annotations

import logging

from courtbook.application.ports.notifier import NotifierPort
from courtbook.domain.entities.lifecycle_event import LifecycleEvent
from courtbook.infrastructure.notifier.messages import compose_notification


class LoggingNotifier(NotifierPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def emit(self, event: LifecycleEvent) -> None:
        title, message = compose_notification(event)
        self._logger.info(
            "Mock notification: %s - %s",
            title,
            message,
            extra={"booking_id": event.booking.id, "event": event.type.value},
        )
