"""Application service: Set Line Quantity use case."""

from __future__ import annotations

from storefront.application.dto import CartLineDTO
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.service.cart_consolidation_service import (
    CartConsolidationService,
)


class SetLineQuantityHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, cart_id: str, variant_id: str, quantity: int) -> CartLineDTO | None:
        """Overwrite the quantity; zero or less removes the line (returns None)."""
        svc = CartConsolidationService(self._cart_repo)
        line = svc.set_line_quantity(cart_id, variant_id, quantity)
        return CartLineDTO.of(line) if line is not None else None
