"""Domain service: Cart Consolidation.

Merges repeated adds of the same variant into one line and removes a
line when its quantity drops to zero. Every operation is a plain
read-then-write against the injected repository: there is no locking,
so two callers racing on the same cart get last-write-wins.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class CartConsolidationService:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def add_to_cart(
        self,
        cart_id: str,
        variant_id: str,
        quantity: int,
        unit_price: Money,
    ) -> CartLine:
        """Add ``quantity`` units of a variant, merging with any existing line.

        The caller is responsible for checking the variant exists in the
        catalog and for supplying its price.
        """
        added = Quantity(quantity)
        if not isinstance(unit_price, Money):
            raise ValidationError("Unit price must be a Money value")

        existing = self._cart_repo.find_line(cart_id, variant_id)
        if existing is not None:
            line = CartLine(
                cart_id=cart_id,
                variant_id=variant_id,
                quantity=Quantity(existing.quantity.value + added.value),
                unit_price=unit_price,
            )
            logger.info(
                "cart_line_merged",
                cart_id=cart_id,
                variant_id=variant_id,
                added=added.value,
                quantity=line.quantity.value,
            )
        else:
            line = CartLine(
                cart_id=cart_id,
                variant_id=variant_id,
                quantity=added,
                unit_price=unit_price,
            )
            logger.info(
                "cart_line_inserted",
                cart_id=cart_id,
                variant_id=variant_id,
                quantity=added.value,
            )

        return self._cart_repo.upsert_line(line)

    def set_line_quantity(
        self,
        cart_id: str,
        variant_id: str,
        new_quantity: int,
    ) -> CartLine | None:
        """Overwrite a line's quantity, or delete the line when <= 0.

        Returns the updated line, or None when the line was removed.
        """
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(new_quantity).__name__}"
            )

        if new_quantity <= 0:
            self._cart_repo.delete_line(cart_id, variant_id)
            logger.info("cart_line_removed", cart_id=cart_id, variant_id=variant_id)
            return None

        existing = self._cart_repo.find_line(cart_id, variant_id)
        if existing is None:
            raise NotFoundError(
                f"Variant '{variant_id}' is not in cart '{cart_id}'"
            )

        line = CartLine(
            cart_id=cart_id,
            variant_id=variant_id,
            quantity=Quantity(new_quantity),
            unit_price=existing.unit_price,
        )
        return self._cart_repo.upsert_line(line)
