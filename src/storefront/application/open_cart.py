"""Application service: Open Cart use case."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository


class OpenCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, session_id: str) -> Cart:
        """Return the session's open cart, creating one if there is none."""
        if not session_id or not session_id.strip():
            raise ValidationError("Session ID is required")

        cart = self._cart_repo.get_open_cart(session_id)
        if cart is not None:
            return cart
        return self._cart_repo.create_cart(session_id)
