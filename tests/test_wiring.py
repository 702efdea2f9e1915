"""
Tests for settings-driven wiring and log formatting.
"""

from __future__ import annotations

import json
import logging
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from courtbook.core.config import Settings, settings
from courtbook.core.logging import ContextFormatter
from courtbook.infrastructure.notifier.logging_notifier import LoggingNotifier
from courtbook.infrastructure.notifier.webhook_notifier import WebhookNotifier
from courtbook.infrastructure.store.json_store import JsonBookingStore
from courtbook.infrastructure.store.memory_store import MemoryBookingStore
from courtbook.wiring import dependencies


@pytest.fixture(autouse=True)
def clear_caches():
    for factory in (
        dependencies.get_booking_store,
        dependencies.get_resource_catalog,
        dependencies.get_discount_codes,
        dependencies.get_notifier,
        dependencies.get_lifecycle_manager,
    ):
        factory.cache_clear()
    yield
    for factory in (
        dependencies.get_booking_store,
        dependencies.get_resource_catalog,
        dependencies.get_discount_codes,
        dependencies.get_notifier,
        dependencies.get_lifecycle_manager,
    ):
        factory.cache_clear()


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("MIN_BOOKING_MINUTES", raising=False)
    fresh = Settings(_env_file=None)

    assert fresh.MIN_BOOKING_MINUTES == 60
    assert fresh.BILLING_GRANULARITY_MINUTES == 30
    assert fresh.STORE_PROVIDER == "memory"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MIN_BOOKING_MINUTES", "90")
    monkeypatch.setenv("STORE_PROVIDER", "json")

    fresh = Settings(_env_file=None)

    assert fresh.MIN_BOOKING_MINUTES == 90
    assert fresh.STORE_PROVIDER == "json"


def test_memory_store_and_logging_notifier_in_dev(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    monkeypatch.setattr(settings, "STORE_PROVIDER", "memory")
    monkeypatch.setattr(settings, "NOTIFIER_WEBHOOK_URL", None)

    assert isinstance(dependencies.get_booking_store(), MemoryBookingStore)
    assert isinstance(dependencies.get_notifier(), LoggingNotifier)


def test_json_store_and_webhook_notifier(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(settings, "STORE_PROVIDER", "json")
        monkeypatch.setattr(settings, "DATA_DIR", tmpdir)
        monkeypatch.setattr(settings, "NOTIFIER_WEBHOOK_URL", "https://hooks.example.test/bookings")

        assert isinstance(dependencies.get_booking_store(), JsonBookingStore)
        notifier = dependencies.get_notifier()
        assert isinstance(notifier, WebhookNotifier)
        notifier.close()


def test_webhook_url_required_outside_dev(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "prod")
    monkeypatch.setattr(settings, "NOTIFIER_WEBHOOK_URL", None)

    with pytest.raises(ValueError):
        dependencies.get_notifier()


def test_lifecycle_manager_is_wired(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    monkeypatch.setattr(settings, "STORE_PROVIDER", "memory")
    monkeypatch.setattr(settings, "NOTIFIER_WEBHOOK_URL", None)

    manager = dependencies.get_lifecycle_manager()

    assert manager is dependencies.get_lifecycle_manager()
    assert manager.get_available_slots("court-a1", date(2030, 1, 7)).ok


def test_discount_codes_default_to_samples(monkeypatch):
    monkeypatch.setattr(settings, "DISCOUNT_CODES_PATH", None)

    codes = dependencies.get_discount_codes()

    assert codes.resolve("welcome10").percent == Decimal("10")


def test_discount_codes_load_from_file(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "codes.json"
        path.write_text(json.dumps([{"code": "SPRING", "amount": "7.50"}]), encoding="utf-8")
        monkeypatch.setattr(settings, "DISCOUNT_CODES_PATH", str(path))

        codes = dependencies.get_discount_codes()

    assert codes.resolve("spring").amount == Decimal("7.50")
    assert codes.resolve("WELCOME10") is None


def test_wired_manager_applies_sample_discount(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    monkeypatch.setattr(settings, "STORE_PROVIDER", "memory")
    monkeypatch.setattr(settings, "NOTIFIER_WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "DISCOUNT_CODES_PATH", None)
    monkeypatch.setattr(settings, "RESOURCE_CATALOG_PATH", None)

    outcome = dependencies.get_lifecycle_manager().create(
        {
            "resource_id": "court-a1",
            "requester_id": "user-1",
            "booking_date": "2030-01-07",
            "start_time": "10:00",
            "end_time": "12:00",
            "discount_code": "COURT5",
        }
    )

    assert outcome.ok, outcome.error
    assert outcome.booking.total_amount == Decimal("45.00")

def test_context_formatter_appends_known_fields():
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")
    record = logging.LogRecord("courtbook", logging.INFO, __file__, 1, "Booking created", None, None)
    record.booking_id = "b1"
    record.status = "pending"
    record.reason = ""

    assert formatter.format(record) == "INFO:courtbook:Booking created | booking_id=b1 status=pending"
