"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import BreakdownDTO, CartDTO, CartLineDTO
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.service.price_calculator import PriceCalculator


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository, calculator: PriceCalculator) -> None:
        self._cart_repo = cart_repo
        self._calculator = calculator

    def handle(self, cart_id: str) -> CartDTO:
        """Price the cart. Lines whose variant is gone are listed, not priced."""
        lines = self._cart_repo.list_lines(cart_id)
        unavailable = self._cart_repo.unavailable_variants(cart_id)
        breakdown = self._calculator.breakdown(lines)
        return CartDTO(
            cart_id=cart_id,
            lines=[CartLineDTO.of(line) for line in lines],
            item_count=sum(line.quantity.value for line in lines),
            breakdown=BreakdownDTO.of(breakdown),
            unavailable=tuple(unavailable),
        )
