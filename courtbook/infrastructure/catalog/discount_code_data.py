from __future__ import annotations

from decimal import Decimal

from courtbook.domain.entities.pricing import Discount


DISCOUNT_CODES: list[Discount] = [
    Discount(code="WELCOME10", percent=Decimal("10")),
    Discount(code="COURT5", amount=Decimal("5.00")),
]
