"""Tabular-API implementation of OrderRepository."""

from __future__ import annotations

from storefront.domain.exceptions import NotFoundError, PersistenceError
from storefront.domain.model.order import (
    Address,
    Customer,
    LineItem,
    Order,
    OrderStatus,
)
from storefront.domain.model.pricing import PriceBreakdown
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.tabular_client import (
    TabularClient,
    eq,
    order_by,
)
from storefront.infrastructure.persistence.wire import (
    compact,
    money_from_wire,
    money_to_wire,
    timestamp_from_wire,
)

_CUSTOMER_COLUMNS = ["id", "email", "first_name", "last_name", "phone", "created_at", "updated_at"]
_ORDER_COLUMNS = [
    "id", "customer_id", "cart_id", "status", "currency", "subtotal_price",
    "total_discounts", "total_tax", "shipping_price", "total_price", "notes",
    "created_at", "updated_at",
]
_LINE_ITEM_COLUMNS = [
    "id", "order_id", "variant_id", "product_id", "title", "sku", "quantity",
    "unit_price", "unit_tax_amount", "total_discount", "total_price",
    "created_at", "updated_at",
]
_ADDRESS_COLUMNS = [
    "order_id", "type", "first_name", "last_name", "company", "phone", "line1",
    "line2", "city", "region", "postal_code", "country_code", "created_at",
]


class TabularOrderRepository(OrderRepository):

    def __init__(self, client: TabularClient) -> None:
        self._client = client

    # --- OrderRepository interface --------------------------------------------

    def create_customer(self, customer: Customer) -> Customer:
        rows = self._client.insert(
            "customers",
            [
                compact({
                    "email": customer.email,
                    "first_name": customer.first_name,
                    "last_name": customer.last_name,
                    "phone": customer.phone,
                })
            ],
            returning=_CUSTOMER_COLUMNS,
        )
        raw = self._single(rows, "customers")
        return Customer(
            id=raw["id"],
            email=raw["email"],
            first_name=raw["first_name"],
            last_name=raw["last_name"],
            phone=raw.get("phone"),
        )

    def create_order(
        self,
        customer_id: str,
        cart_id: str,
        breakdown: PriceBreakdown,
        notes: str | None = None,
    ) -> Order:
        rows = self._client.insert(
            "orders",
            [
                compact({
                    "customer_id": customer_id,
                    "cart_id": cart_id,
                    "status": OrderStatus.PENDING.value,
                    "currency": breakdown.currency,
                    "subtotal_price": money_to_wire(breakdown.subtotal),
                    "total_discounts": 0,
                    "total_tax": money_to_wire(breakdown.tax),
                    "shipping_price": money_to_wire(breakdown.shipping),
                    "total_price": money_to_wire(breakdown.total),
                    "notes": notes,
                })
            ],
            returning=_ORDER_COLUMNS,
        )
        return self._to_order(self._single(rows, "orders"))

    def create_line_items(self, items: list[LineItem]) -> list[LineItem]:
        rows = self._client.insert(
            "line_items",
            [
                compact({
                    "order_id": item.order_id,
                    "variant_id": item.variant_id,
                    "product_id": item.product_id,
                    "title": item.title,
                    "sku": item.sku,
                    "quantity": item.quantity.value,
                    "unit_price": money_to_wire(item.unit_price),
                    "unit_tax_amount": 0,
                    "total_discount": 0,
                    "total_price": money_to_wire(item.total_price),
                })
                for item in items
            ],
            returning=_LINE_ITEM_COLUMNS,
        )
        if len(rows) != len(items):
            raise PersistenceError(
                f"Expected {len(items)} line items to be written, store returned {len(rows)}"
            )
        return [
            LineItem(
                id=raw.get("id"),
                order_id=raw["order_id"],
                variant_id=raw["variant_id"],
                product_id=raw.get("product_id"),
                title=raw.get("title"),
                sku=raw.get("sku"),
                quantity=Quantity(int(raw["quantity"])),
                unit_price=money_from_wire(raw["unit_price"], item.unit_price.currency),
            )
            for raw, item in zip(rows, items)
        ]

    def create_addresses(self, addresses: list[Address]) -> list[Address]:
        rows = self._client.insert(
            "order_addresses",
            [
                compact({
                    "order_id": a.order_id,
                    "type": a.type.value,
                    "first_name": a.first_name,
                    "last_name": a.last_name,
                    "company": a.company,
                    "phone": a.phone,
                    "line1": a.line1,
                    "line2": a.line2,
                    "city": a.city,
                    "region": a.region,
                    "postal_code": a.postal_code,
                    "country_code": a.country_code,
                })
                for a in addresses
            ],
            returning=_ADDRESS_COLUMNS,
        )
        if len(rows) != len(addresses):
            raise PersistenceError(
                f"Expected {len(addresses)} addresses to be written, store returned {len(rows)}"
            )
        return list(addresses)

    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        rows = self._client.update(
            "orders",
            {"status": status.value},
            where=[eq("id", order_id)],
            returning=_ORDER_COLUMNS,
        )
        if not rows:
            raise NotFoundError(f"Order #{order_id} not found")
        return self._to_order(rows[0])

    def get_by_id(self, order_id: str) -> Order | None:
        rows = self._client.select("orders", where=[eq("id", order_id)], limit=1)
        return self._to_order(rows[0]) if rows else None

    def list_all(self) -> list[Order]:
        rows = self._client.select("orders", sort=[order_by("created_at", "DESC")])
        return [self._to_order(raw) for raw in rows]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _single(rows: list[dict], table: str) -> dict:
        if not rows:
            raise PersistenceError(f"Insert into '{table}' returned no row")
        return rows[0]

    @staticmethod
    def _to_order(raw: dict) -> Order:
        currency = raw.get("currency") or "USD"
        return Order(
            id=raw["id"],
            customer_id=raw.get("customer_id"),
            cart_id=raw.get("cart_id"),
            subtotal=money_from_wire(raw.get("subtotal_price"), currency),
            shipping=money_from_wire(raw.get("shipping_price"), currency),
            tax=money_from_wire(raw.get("total_tax"), currency),
            total=money_from_wire(raw.get("total_price"), currency),
            status=OrderStatus.parse(raw["status"]),
            notes=raw.get("notes"),
            created_at=timestamp_from_wire(raw.get("created_at")),
        )
