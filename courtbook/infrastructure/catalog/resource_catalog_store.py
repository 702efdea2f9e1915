from __future__ import annotations

import json
from datetime import time
from decimal import Decimal
from pathlib import Path
from typing import Any

from courtbook.application.exceptions import ResourceNotFoundError
from courtbook.application.ports.resource_catalog import ResourceCatalogPort
from courtbook.domain.entities.resource import DayHours, Resource, Weekday
from courtbook.infrastructure.catalog.resource_catalog_data import RESOURCE_CATALOG


class ResourceCatalogStore(ResourceCatalogPort):
    def __init__(self, catalog: dict[str, Resource] | None = None) -> None:
        self._catalog = catalog if catalog is not None else RESOURCE_CATALOG

    @classmethod
    def from_json_file(cls, path: str | Path) -> ResourceCatalogStore:
        """
        Load resources from a JSON list such as:
        [{"resource_id": "court-1", "rate_per_hour": "25.00",
          "operating_hours": {"monday": {"is_open": true, "open": "08:00", "close": "22:00"}}}]
        """
        with open(path, "r", encoding="utf-8") as f:
            raw_resources = json.load(f)
        resources = [_resource_from_dict(raw) for raw in raw_resources]
        return cls({r.resource_id: r for r in resources})

    def get_resource(self, resource_id: str) -> Resource:
        resource = self._catalog.get(resource_id.strip())
        if resource is None:
            raise ResourceNotFoundError(f"Resource {resource_id} not found")
        return resource


def _resource_from_dict(data: dict[str, Any]) -> Resource:
    hours: dict[Weekday, DayHours] = {}
    for day_name, raw in (data.get("operating_hours") or {}).items():
        if not raw.get("is_open", True):
            hours[Weekday(day_name.lower())] = DayHours.closed()
            continue
        hours[Weekday(day_name.lower())] = DayHours(
            is_open=True,
            open=time.fromisoformat(raw["open"]),
            close=time.fromisoformat(raw["close"]),
        )
    return Resource(
        resource_id=str(data["resource_id"]),
        rate_per_hour=Decimal(str(data["rate_per_hour"])),
        operating_hours=hours,
        name=data.get("name", ""),
        owner_id=data.get("owner_id"),
    )
