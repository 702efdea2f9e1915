from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from courtbook.application.utils.time_math import is_wall_clock_minute
from courtbook.domain.entities.pricing import AddOn


class AddOnDTO(BaseModel):
    name: str = ""
    amount: Decimal


class BookingRequestDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    resource_id: str = Field(min_length=1)
    requester_id: str = Field(min_length=1)
    booking_date: date
    start_time: time
    end_time: time
    add_ons: list[AddOnDTO] = Field(default_factory=list)
    discount_code: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_wall_clock_minute(cls, value: time) -> time:
        # Times are local to the resource and counted in whole minutes.
        if not is_wall_clock_minute(value):
            raise ValueError("time must be HH:MM local time without seconds or UTC offset")
        return value

    def to_add_ons(self) -> tuple[AddOn, ...]:
        return tuple(AddOn(amount=a.amount, name=a.name) for a in self.add_ons)
