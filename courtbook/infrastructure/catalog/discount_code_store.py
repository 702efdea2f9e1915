from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any

from courtbook.application.ports.discount_codes import DiscountCodePort
from courtbook.domain.entities.pricing import Discount
from courtbook.infrastructure.catalog.discount_code_data import DISCOUNT_CODES


class DiscountCodeStore(DiscountCodePort):
    def __init__(self, discounts: list[Discount] | None = None) -> None:
        discounts = discounts if discounts is not None else DISCOUNT_CODES
        self._discounts = {d.code.strip().upper(): d for d in discounts}

    @classmethod
    def from_json_file(cls, path: str | Path) -> DiscountCodeStore:
        """
        Load codes from a JSON list such as:
        [{"code": "SUMMER", "percent": "15"}, {"code": "LOYAL", "amount": "5.00"}]
        """
        with open(path, "r", encoding="utf-8") as f:
            raw_codes = json.load(f)
        return cls([_discount_from_dict(raw) for raw in raw_codes])

    def resolve(self, code: str) -> Discount | None:
        return self._discounts.get(code.strip().upper())


def _decimal_or_none(value: Any) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def _discount_from_dict(data: dict[str, Any]) -> Discount:
    return Discount(
        code=str(data["code"]),
        amount=_decimal_or_none(data.get("amount")),
        percent=_decimal_or_none(data.get("percent")),
    )
