from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AddOn:
    amount: Decimal
    name: str = ""


@dataclass(frozen=True)
class Discount:
    """A resolved discount code: either a fixed amount or a percentage."""

    code: str
    amount: Decimal | None = None
    percent: Decimal | None = None

    def __post_init__(self) -> None:
        if (self.amount is None) == (self.percent is None):
            raise ValueError("Discount needs exactly one of amount or percent")
        if self.amount is not None and self.amount < 0:
            raise ValueError(f"Discount amount must be >= 0, got {self.amount}")
        if self.percent is not None and not (0 <= self.percent <= 100):
            raise ValueError(f"Discount percent must be within 0..100, got {self.percent}")


@dataclass(frozen=True)
class PriceQuote:
    base_amount: Decimal
    additional_charges: Decimal
    discount_amount: Decimal
    total_amount: Decimal
