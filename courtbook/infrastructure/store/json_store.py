from __future__ import annotations

import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any, Iterable
from urllib.parse import quote, unquote

from courtbook.application.exceptions import BookingConflictError, BookingNotFoundError
from courtbook.application.ports.booking_store import BookingStorePort
from courtbook.application.utils.keyed_lock import KeyedLocks
from courtbook.application.utils.time_math import overlaps
from courtbook.domain.entities.blocked_slot import BlockedSlot
from courtbook.domain.entities.booking import Booking, BookingStatus
from courtbook.domain.state_machine import is_blocking
from courtbook.infrastructure.serialization import (
    block_from_dict,
    block_to_dict,
    booking_from_dict,
    booking_to_dict,
)


DayKey = tuple[str, date]


class JsonBookingStore(BookingStorePort):
    """
    File-backed booking store: one JSON document per (resource_id, date),
    laid out as <data_dir>/<resource_id>/<YYYY-MM-DD>.json.

    Every read-modify-write of a day document happens under that day's lock,
    which makes insert_if_available atomic within this process.
    """

    def __init__(self, data_dir: str = "./data/bookings") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._day_locks = KeyedLocks()
        self._index: dict[str, DayKey] = {}
        self._index_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)
        self._rebuild_index()

    def _get_file_path(self, key: DayKey) -> Path:
        resource_id, booking_date = key
        return self._data_dir / quote(resource_id, safe="") / f"{booking_date.isoformat()}.json"

    def _empty_day(self, key: DayKey) -> dict[str, Any]:
        resource_id, booking_date = key
        return {
            "resource_id": resource_id,
            "booking_date": booking_date.isoformat(),
            "bookings": [],
            "blocks": [],
            "version": 1,
        }

    def _load_day(self, key: DayKey) -> dict[str, Any]:
        """Load a day document; a missing file is an empty day."""
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return self._empty_day(key)
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data.setdefault("bookings", [])
        data.setdefault("blocks", [])
        return data

    def _save_day(self, key: DayKey, data: dict[str, Any]) -> None:
        """Save a day document atomically via a temp file and rename."""
        file_path = self._get_file_path(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def _rebuild_index(self) -> None:
        for file_path in self._data_dir.glob("*/*.json"):
            key = (unquote(file_path.parent.name), date.fromisoformat(file_path.stem))
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            for raw in data.get("bookings", []):
                self._index[raw["id"]] = key
        self._logger.info("Booking index loaded: %s bookings", len(self._index))

    def _day_bookings(self, key: DayKey) -> list[Booking]:
        return [booking_from_dict(raw) for raw in self._load_day(key)["bookings"]]

    def get(self, booking_id: str) -> Booking | None:
        with self._index_lock:
            key = self._index.get(booking_id)
        if key is None:
            return None
        with self._day_locks.hold(key):
            for booking in self._day_bookings(key):
                if booking.id == booking_id:
                    return booking
        return None

    def find_by_day(
        self,
        resource_id: str,
        booking_date: date,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        key = (resource_id, booking_date)
        wanted = set(statuses) if statuses is not None else None
        with self._day_locks.hold(key):
            bookings = self._day_bookings(key)
        return [b for b in bookings if wanted is None or b.status in wanted]

    def insert_if_available(self, booking: Booking) -> Booking:
        key = (booking.resource_id, booking.booking_date)
        with self._day_locks.hold(key):
            data = self._load_day(key)
            for other in (booking_from_dict(raw) for raw in data["bookings"]):
                if is_blocking(other.status) and overlaps(
                    other.start_time, other.end_time, booking.start_time, booking.end_time
                ):
                    raise BookingConflictError(f"Booking {booking.id} overlaps booking {other.id}")
            for block in (block_from_dict(raw) for raw in data["blocks"]):
                if overlaps(block.start_time, block.end_time, booking.start_time, booking.end_time):
                    raise BookingConflictError(f"Booking {booking.id} overlaps blocked slot {block.id}")

            data["bookings"].append(booking_to_dict(booking))
            self._save_day(key, data)
            with self._index_lock:
                self._index[booking.id] = key
        return booking

    def update(self, booking: Booking) -> Booking:
        key = (booking.resource_id, booking.booking_date)
        with self._day_locks.hold(key):
            data = self._load_day(key)
            for position, raw in enumerate(data["bookings"]):
                if raw["id"] == booking.id:
                    data["bookings"][position] = booking_to_dict(booking)
                    self._save_day(key, data)
                    return booking
        raise BookingNotFoundError(f"Booking {booking.id} not found")

    def list_bookings(
        self,
        requester_id: str | None = None,
        resource_id: str | None = None,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        wanted = set(statuses) if statuses is not None else None
        with self._index_lock:
            keys = set(self._index.values())

        bookings: list[Booking] = []
        for key in keys:
            if resource_id is not None and key[0] != resource_id:
                continue
            with self._day_locks.hold(key):
                bookings.extend(self._day_bookings(key))
        return [
            b
            for b in bookings
            if (requester_id is None or b.requester_id == requester_id)
            and (wanted is None or b.status in wanted)
        ]

    def add_block(self, block: BlockedSlot) -> BlockedSlot:
        key = (block.resource_id, block.booking_date)
        with self._day_locks.hold(key):
            data = self._load_day(key)
            data["blocks"].append(block_to_dict(block))
            self._save_day(key, data)
        return block

    def find_blocks(self, resource_id: str, booking_date: date) -> list[BlockedSlot]:
        key = (resource_id, booking_date)
        with self._day_locks.hold(key):
            return [block_from_dict(raw) for raw in self._load_day(key)["blocks"]]
