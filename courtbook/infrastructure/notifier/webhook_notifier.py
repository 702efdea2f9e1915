from __future__ import annotations

import logging
from typing import Any

import httpx

from courtbook.application.ports.notifier import NotifierPort
from courtbook.domain.entities.lifecycle_event import LifecycleEvent
from courtbook.infrastructure.notifier.messages import compose_notification
from courtbook.infrastructure.serialization import booking_to_dict


class WebhookNotifier(NotifierPort):
    """Posts lifecycle events as JSON to a webhook consumed by the delivery service."""

    def __init__(self, endpoint: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def emit(self, event: LifecycleEvent) -> None:
        title, message = compose_notification(event)
        payload: dict[str, Any] = {
            "type": event.type.value,
            "occurred_at": event.occurred_at.isoformat(),
            "resource_name": event.resource_name,
            "title": title,
            "message": message,
            "booking": booking_to_dict(event.booking),
        }
        resp = self._client.post(self._endpoint, json=payload)
        if resp.status_code >= 400:
            self._logger.error(
                "Lifecycle webhook failed",
                extra={
                    "booking_id": event.booking.id,
                    "event": event.type.value,
                    "status": resp.status_code,
                    "reason": resp.text[:200],
                },
            )
            resp.raise_for_status()

    def close(self) -> None:
        self._client.close()
