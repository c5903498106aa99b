"""Abstract repository for carts and their lines.

Defined in the domain layer so the domain never depends on
infrastructure. Implementations enforce no business rules; the
consolidation service does that before calling in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart, CartLine


class CartRepository(ABC):

    @abstractmethod
    def get_open_cart(self, session_id: str) -> Cart | None:
        """Return the open cart for a shopper session, or None."""

    @abstractmethod
    def create_cart(self, session_id: str) -> Cart:
        """Open a new cart for a shopper session."""

    @abstractmethod
    def find_line(self, cart_id: str, variant_id: str) -> CartLine | None:
        """Return the line for a variant in a cart, or None."""

    @abstractmethod
    def list_lines(self, cart_id: str) -> list[CartLine]:
        """Return every line in a cart whose variant can still be priced."""

    @abstractmethod
    def unavailable_variants(self, cart_id: str) -> list[str]:
        """Return variant IDs of lines whose variant is gone from the catalog."""

    @abstractmethod
    def upsert_line(self, line: CartLine) -> CartLine:
        """Insert the line, or replace the quantity of the existing one."""

    @abstractmethod
    def delete_line(self, cart_id: str, variant_id: str) -> None:
        """Remove a line. Removing an absent line is not an error."""

    @abstractmethod
    def clear_lines(self, cart_id: str) -> None:
        """Remove every line in a cart."""
