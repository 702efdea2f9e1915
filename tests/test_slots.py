"""
Tests for slot generation from operating hours.
"""

from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal

import pytest

from courtbook.application.utils.slots import generate_slots
from courtbook.domain.entities.resource import DayHours


def test_closed_day_has_no_slots():
    assert generate_slots(DayHours.closed()) == []


def test_two_hour_window_yields_two_hourly_slots():
    slots = generate_slots(DayHours(is_open=True, open=time(8, 0), close=time(10, 0)), timedelta(hours=1))

    assert [(s.start, s.end) for s in slots] == [(time(8, 0), time(9, 0)), (time(9, 0), time(10, 0))]
    assert all(s.duration_hours == Decimal(1) for s in slots)


def test_full_operating_day_yields_fourteen_slots():
    slots = generate_slots(DayHours(is_open=True, open=time(8, 0), close=time(22, 0)))

    assert len(slots) == 14
    assert slots[0].label == "08:00 - 09:00"
    assert slots[-1].label == "21:00 - 22:00"


def test_trailing_partial_slot_is_dropped():
    slots = generate_slots(DayHours(is_open=True, open=time(8, 0), close=time(10, 30)))

    assert [s.end for s in slots] == [time(9, 0), time(10, 0)]


def test_half_hour_granularity():
    slots = generate_slots(DayHours(is_open=True, open=time(8, 0), close=time(9, 30)), timedelta(minutes=30))

    assert [s.start for s in slots] == [time(8, 0), time(8, 30), time(9, 0)]
    assert slots[0].duration_hours == Decimal("0.5")


def test_generation_is_deterministic():
    hours = DayHours(is_open=True, open=time(6, 0), close=time(23, 0))
    assert generate_slots(hours) == generate_slots(hours)


def test_non_positive_granularity_is_rejected():
    with pytest.raises(ValueError):
        generate_slots(DayHours(is_open=True, open=time(8, 0), close=time(10, 0)), timedelta(0))


def test_open_day_requires_open_before_close():
    with pytest.raises(ValueError):
        DayHours(is_open=True, open=time(10, 0), close=time(8, 0))
