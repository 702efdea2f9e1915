from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from courtbook.domain.entities.pricing import AddOn, Discount, PriceQuote
from courtbook.domain.entities.resource import Resource


CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def discount_amount(discount: Discount | None, subtotal: Decimal) -> Decimal:
    if discount is None:
        return ZERO
    if discount.amount is not None:
        return to_money(discount.amount)
    return to_money(subtotal * discount.percent / Decimal(100))


def price(
    resource: Resource,
    duration_hours: Decimal,
    add_ons: Iterable[AddOn] = (),
    discount: Discount | None = None,
) -> PriceQuote:
    """
    Price a booking of `duration_hours` on `resource`.

    The total is clamped at zero, so a discount larger than the subtotal
    yields a free booking rather than a negative one.
    """
    if duration_hours <= 0:
        raise ValueError(f"Duration must be positive, got {duration_hours}")

    charges = list(add_ons)
    negative = [a.name or str(a.amount) for a in charges if a.amount < 0]
    if negative:
        raise ValueError(f"Add-on amounts must not be negative: {negative}")

    base = to_money(resource.rate_per_hour * duration_hours)
    additional = to_money(sum((a.amount for a in charges), ZERO))
    discount_value = discount_amount(discount, base + additional)
    total = max(ZERO, base + additional - discount_value)

    return PriceQuote(
        base_amount=base,
        additional_charges=additional,
        discount_amount=discount_value,
        total_amount=to_money(total),
    )
