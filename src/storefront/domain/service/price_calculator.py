"""Domain service: Price Calculator.

Derives the subtotal, shipping, tax and total for a set of cart lines.
All arithmetic is in integer minor units; the only rounding happens
when the tax rate is applied.
"""

from __future__ import annotations

from typing import Sequence

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.pricing import PriceBreakdown, ShippingPolicy, TaxPolicy
from storefront.domain.model.value_objects import Money


def compute_breakdown(
    lines: Sequence[CartLine],
    shipping_policy: ShippingPolicy,
    tax_policy: TaxPolicy,
    currency: str = "USD",
) -> PriceBreakdown:
    """Price a list of cart lines.

    An empty list has a zero subtotal; whether it still pays shipping is
    up to the shipping policy.
    """
    subtotal = Money.zero(currency)
    for line in lines:
        if line.unit_price.currency != currency:
            raise ValidationError(
                f"Line for variant '{line.variant_id}' is priced in "
                f"{line.unit_price.currency}, expected {currency}"
            )
        subtotal = subtotal + line.line_total

    shipping = shipping_policy.quote(lines, subtotal)
    tax = tax_policy.tax_on(subtotal)
    return PriceBreakdown(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )


class PriceCalculator:
    """Binds a shipping and tax policy so callers only pass lines."""

    def __init__(
        self,
        shipping_policy: ShippingPolicy,
        tax_policy: TaxPolicy,
        currency: str = "USD",
    ) -> None:
        self.shipping_policy = shipping_policy
        self.tax_policy = tax_policy
        self.currency = currency

    def breakdown(self, lines: Sequence[CartLine]) -> PriceBreakdown:
        return compute_breakdown(
            lines, self.shipping_policy, self.tax_policy, self.currency
        )
