"""Pricing policies and the derived PriceBreakdown.

Policies are small strategy objects so a weight- or destination-based
shipping rule can replace the flat rate without touching the calculator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class PriceBreakdown:
    """Subtotal, shipping, tax and total for a set of cart lines.

    Never cached; orders snapshot these four values at creation time.
    """

    subtotal: Money
    shipping: Money
    tax: Money
    total: Money

    def __post_init__(self) -> None:
        if self.subtotal + self.shipping + self.tax != self.total:
            raise ValidationError(
                f"Breakdown total {self.total} does not equal "
                f"{self.subtotal} + {self.shipping} + {self.tax}"
            )

    @property
    def currency(self) -> str:
        return self.total.currency


class ShippingPolicy(ABC):

    @abstractmethod
    def quote(self, lines: Sequence[CartLine], subtotal: Money) -> Money:
        """Return the shipping charge for these lines."""


class TaxPolicy(ABC):

    @abstractmethod
    def tax_on(self, subtotal: Money) -> Money:
        """Return the tax owed on a subtotal."""


class FlatRateShipping(ShippingPolicy):
    """Same charge for every order, whatever its weight or destination."""

    def __init__(self, flat_rate: Money, charge_empty_cart: bool = True) -> None:
        self.flat_rate = flat_rate
        self.charge_empty_cart = charge_empty_cart

    def quote(self, lines: Sequence[CartLine], subtotal: Money) -> Money:
        if not lines and not self.charge_empty_cart:
            return Money.zero(subtotal.currency)
        return self.flat_rate


class FlatRateTax(TaxPolicy):
    """A single percentage applied to the whole subtotal."""

    def __init__(self, rate: Decimal) -> None:
        if not isinstance(rate, Decimal):
            rate = Decimal(str(rate))
        if rate < 0:
            raise ValidationError(f"Tax rate cannot be negative, got {rate}")
        self.rate = rate

    def tax_on(self, subtotal: Money) -> Money:
        return subtotal.apply_rate(self.rate)
