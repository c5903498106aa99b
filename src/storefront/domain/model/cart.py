"""Cart aggregate and its consolidated lines."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money, Quantity

CART_OPEN = "OPEN"


@dataclass
class Cart:
    id: str
    session_id: str
    status: str = CART_OPEN


@dataclass
class CartLine:
    """One distinct variant inside a cart.

    Invariants:
    - at most one line per (``cart_id``, ``variant_id``)
    - ``quantity`` stays positive while the line exists
    """

    cart_id: str
    variant_id: str
    quantity: Quantity
    unit_price: Money  # read from the variant, not re-validated later

    @property
    def key(self) -> tuple[str, str]:
        return (self.cart_id, self.variant_id)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value
