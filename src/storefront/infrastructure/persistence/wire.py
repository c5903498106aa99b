"""Conversions between domain values and tabular API column values.

The API stores money as plain decimal numbers and timestamps as ISO-8601
strings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any

from storefront.domain.model.value_objects import Money


def money_from_wire(raw: Any, currency: str = "USD") -> Money:
    # Float columns can come back as 29.990000000000002
    value = Decimal(str(raw if raw is not None else 0)).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_EVEN
    )
    return Money.of(value, currency)


def optional_money_from_wire(raw: Any, currency: str = "USD") -> Money | None:
    return None if raw is None else money_from_wire(raw, currency)


def money_to_wire(money: Money | None) -> float | None:
    return None if money is None else float(money.amount)


def timestamp_from_wire(raw: str | None) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def compact(row: dict) -> dict:
    """Drop unset columns so the store applies its own defaults."""
    return {key: value for key, value in row.items() if value is not None}
