"""Tabular-API implementation of CartRepository.

``cart_items`` rows hold only the quantity; the unit price is read from
``product_variants`` each time a line is loaded. A line whose variant has
been deleted cannot be priced; it is left out of ``list_lines`` and
reported by ``unavailable_variants`` instead.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import NotFoundError, PersistenceError
from storefront.domain.model.cart import CART_OPEN, Cart, CartLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.tabular_client import TabularClient, eq
from storefront.infrastructure.persistence.wire import money_from_wire

_CART_COLUMNS = ["id", "session_id", "status", "created_at", "updated_at"]
_LINE_COLUMNS = ["id", "cart_id", "variant_id", "quantity", "created_at", "updated_at"]

logger = structlog.get_logger(__name__)


class TabularCartRepository(CartRepository):

    def __init__(self, client: TabularClient, currency: str = "USD") -> None:
        self._client = client
        self._currency = currency

    # --- CartRepository interface ---------------------------------------------

    def get_open_cart(self, session_id: str) -> Cart | None:
        rows = self._client.select(
            "carts", where=[eq("session_id", session_id), eq("status", CART_OPEN)]
        )
        return self._to_cart(rows[0]) if rows else None

    def create_cart(self, session_id: str) -> Cart:
        rows = self._client.insert(
            "carts",
            [{"session_id": session_id, "status": CART_OPEN}],
            returning=_CART_COLUMNS,
        )
        if not rows:
            raise PersistenceError("Cart insert returned no row")
        return self._to_cart(rows[0])

    def find_line(self, cart_id: str, variant_id: str) -> CartLine | None:
        rows = self._client.select("cart_items", where=self._line_key(cart_id, variant_id))
        if not rows:
            return None
        return self._to_line(rows[0], self._price_of(variant_id))

    def list_lines(self, cart_id: str) -> list[CartLine]:
        lines, missing = self._load(cart_id)
        if missing:
            logger.warning("cart_lines_unpriced", cart_id=cart_id, variant_ids=missing)
        return lines

    def unavailable_variants(self, cart_id: str) -> list[str]:
        return self._load(cart_id)[1]

    def upsert_line(self, line: CartLine) -> CartLine:
        # Update first; an empty result means there was no row to update.
        rows = self._client.update(
            "cart_items",
            {"quantity": line.quantity.value},
            where=self._line_key(line.cart_id, line.variant_id),
            returning=_LINE_COLUMNS,
        )
        if not rows:
            rows = self._client.insert(
                "cart_items",
                [
                    {
                        "cart_id": line.cart_id,
                        "variant_id": line.variant_id,
                        "quantity": line.quantity.value,
                    }
                ],
                returning=_LINE_COLUMNS,
            )
        if not rows:
            raise PersistenceError("Cart line write returned no row")
        return self._to_line(rows[0], line.unit_price)

    def delete_line(self, cart_id: str, variant_id: str) -> None:
        self._client.delete("cart_items", where=self._line_key(cart_id, variant_id))

    def clear_lines(self, cart_id: str) -> None:
        self._client.delete("cart_items", where=[eq("cart_id", cart_id)])

    # --- Serialization --------------------------------------------------------

    def _load(self, cart_id: str) -> tuple[list[CartLine], list[str]]:
        rows = self._client.select("cart_items", where=[eq("cart_id", cart_id)])
        prices: dict[str, Money | None] = {}
        lines: list[CartLine] = []
        missing: list[str] = []
        for raw in rows:
            variant_id = raw["variant_id"]
            if variant_id not in prices:
                prices[variant_id] = self._lookup_price(variant_id)
            price = prices[variant_id]
            if price is None:
                missing.append(variant_id)
            else:
                lines.append(self._to_line(raw, price))
        return lines, missing

    def _lookup_price(self, variant_id: str) -> Money | None:
        rows = self._client.select("product_variants", where=[eq("id", variant_id)], limit=1)
        if not rows:
            return None
        return money_from_wire(rows[0]["price"], self._currency)

    def _price_of(self, variant_id: str) -> Money:
        price = self._lookup_price(variant_id)
        if price is None:
            raise NotFoundError(f"Variant not found: '{variant_id}'")
        return price

    @staticmethod
    def _line_key(cart_id: str, variant_id: str) -> list[dict]:
        return [eq("cart_id", cart_id), eq("variant_id", variant_id)]

    @staticmethod
    def _to_cart(raw: dict) -> Cart:
        return Cart(id=raw["id"], session_id=raw["session_id"], status=raw.get("status", CART_OPEN))

    @staticmethod
    def _to_line(raw: dict, unit_price: Money) -> CartLine:
        return CartLine(
            cart_id=raw["cart_id"],
            variant_id=raw["variant_id"],
            quantity=Quantity(int(raw["quantity"])),
            unit_price=unit_price,
        )
