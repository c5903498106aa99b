"""Tests for the tabular repositories: request shape and row mapping."""

import pytest

from storefront.domain.exceptions import NotFoundError, PersistenceError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.catalog import Product
from storefront.domain.model.order import LineItem, OrderStatus
from storefront.domain.model.pricing import PriceBreakdown
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence.tabular_cart_repository import TabularCartRepository
from storefront.infrastructure.persistence.tabular_catalog_repository import (
    TabularCatalogRepository,
)
from storefront.infrastructure.persistence.tabular_client import TabularClient
from storefront.infrastructure.persistence.tabular_order_repository import (
    TabularOrderRepository,
)
from tests.infrastructure.fake_session import FakeSession, ok

ORDER_ROW = {
    "id": "o1",
    "customer_id": "c1",
    "cart_id": "cart-1",
    "status": "PENDING",
    "currency": "USD",
    "subtotal_price": 679.97,
    "total_discounts": 0,
    "total_tax": 54.4,
    "shipping_price": 15,
    "total_price": 749.37,
    "created_at": "2026-10-01T12:00:00Z",
}


def _routed(routes: dict) -> FakeSession:
    """Answer by (operation, table); unknown routes return no rows."""
    return FakeSession(lambda r: ok(routes.get((r["operation"], r["table"]), [])))


def _client(session: FakeSession) -> TabularClient:
    return TabularClient("https://api.example.test", "t", session=session)


class TestTabularCartRepository:

    def test_find_line_reads_variant_price(self):
        session = _routed({
            ("select", "cart_items"): [{"cart_id": "cart-1", "variant_id": "1-s", "quantity": 3}],
            ("select", "product_variants"): [{"id": "1-s", "price": 299.99}],
        })
        line = TabularCartRepository(_client(session)).find_line("cart-1", "1-s")
        assert line.quantity.value == 3
        assert line.unit_price == Money(29999)

    def test_find_line_absent(self):
        assert TabularCartRepository(_client(_routed({}))).find_line("cart-1", "1-s") is None

    def test_line_for_deleted_variant_is_set_aside(self):
        def respond(request):
            if request["table"] == "cart_items":
                return ok([
                    {"cart_id": "cart-1", "variant_id": "gone", "quantity": 1},
                    {"cart_id": "cart-1", "variant_id": "1-s", "quantity": 2},
                ])
            if request["where_conditions"][0]["value"] == "1-s":
                return ok([{"id": "1-s", "price": 299.99}])
            return ok()

        repo = TabularCartRepository(_client(FakeSession(respond)))
        assert [line.variant_id for line in repo.list_lines("cart-1")] == ["1-s"]
        assert repo.unavailable_variants("cart-1") == ["gone"]

    def test_find_line_for_deleted_variant(self):
        session = _routed({
            ("select", "cart_items"): [{"cart_id": "cart-1", "variant_id": "gone", "quantity": 1}],
        })
        with pytest.raises(NotFoundError, match="gone"):
            TabularCartRepository(_client(session)).find_line("cart-1", "gone")

    def test_upsert_inserts_when_update_matches_nothing(self):
        row = {"cart_id": "cart-1", "variant_id": "1-s", "quantity": 2}
        session = _routed({("insert", "cart_items"): [row]})
        line = CartLine("cart-1", "1-s", Quantity(2), Money(29999))
        saved = TabularCartRepository(_client(session)).upsert_line(line)
        assert [r["operation"] for r in session.requests] == ["update", "insert"]
        assert session.requests[1]["data"] == [row]
        assert saved == line

    def test_upsert_updates_existing_row(self):
        row = {"cart_id": "cart-1", "variant_id": "1-s", "quantity": 5}
        session = _routed({("update", "cart_items"): [row]})
        line = CartLine("cart-1", "1-s", Quantity(5), Money(29999))
        TabularCartRepository(_client(session)).upsert_line(line)
        assert [r["operation"] for r in session.requests] == ["update"]
        assert session.requests[0]["data"] == [{"quantity": 5}]

    def test_delete_line(self):
        session = _routed({})
        TabularCartRepository(_client(session)).delete_line("cart-1", "1-s")
        assert session.requests[0]["operation"] == "delete"
        assert session.requests[0]["where_conditions"] == [
            {"column": "cart_id", "op": "eq", "value": "cart-1"},
            {"column": "variant_id", "op": "eq", "value": "1-s"},
        ]

    def test_clear_lines_deletes_by_cart(self):
        session = _routed({})
        TabularCartRepository(_client(session)).clear_lines("cart-1")
        assert session.requests == [{
            "operation": "delete",
            "table": "cart_items",
            "data": [],
            "where_conditions": [{"column": "cart_id", "op": "eq", "value": "cart-1"}],
        }]

    def test_get_open_cart_filters_on_status(self):
        session = _routed({("select", "carts"): [{"id": "cart-1", "session_id": "s1", "status": "OPEN"}]})
        cart = TabularCartRepository(_client(session)).get_open_cart("s1")
        assert cart.id == "cart-1"
        assert {"column": "status", "op": "eq", "value": "OPEN"} in session.requests[0]["where_conditions"]


class TestTabularOrderRepository:

    def test_create_order_snapshots_breakdown(self):
        session = _routed({("insert", "orders"): [ORDER_ROW]})
        breakdown = PriceBreakdown(Money(67997), Money(1500), Money(5440), Money(74937))
        order = TabularOrderRepository(_client(session)).create_order("c1", "cart-1", breakdown)

        sent = session.requests[0]["data"][0]
        assert sent["status"] == "PENDING"
        assert sent["total_price"] == 749.37
        assert sent["total_tax"] == 54.4
        assert "notes" not in sent
        assert order.total == Money(74937)
        assert order.shipping == Money(1500)
        assert order.created_at.tzinfo is not None

    def test_update_status_parses_wire_value(self):
        session = _routed({("update", "orders"): [dict(ORDER_ROW, status="ON-HOLD")]})
        order = TabularOrderRepository(_client(session)).update_status("o1", OrderStatus.ON_HOLD)
        assert session.requests[0]["data"] == [{"status": "ON-HOLD"}]
        assert order.status is OrderStatus.ON_HOLD

    def test_update_status_unknown_order(self):
        with pytest.raises(NotFoundError):
            TabularOrderRepository(_client(_routed({}))).update_status("o9", OrderStatus.FAILED)

    def test_float_noise_rounded_to_cents(self):
        session = _routed({("select", "orders"): [dict(ORDER_ROW, subtotal_price=679.9700000000001)]})
        [order] = TabularOrderRepository(_client(session)).list_all()
        assert order.subtotal == Money(67997)

    def test_short_line_item_write_is_an_error(self):
        items = [
            LineItem(order_id="o1", variant_id="1-s", quantity=Quantity(1), unit_price=Money(29999)),
            LineItem(order_id="o1", variant_id="2-m", quantity=Quantity(2), unit_price=Money(18999)),
        ]
        session = _routed({("insert", "line_items"): [{"order_id": "o1", "variant_id": "1-s",
                                                       "quantity": 1, "unit_price": 299.99}]})
        with pytest.raises(PersistenceError, match="Expected 2 line items"):
            TabularOrderRepository(_client(session)).create_line_items(items)


class TestTabularCatalogRepository:

    def test_published_filter(self):
        session = _routed({})
        TabularCatalogRepository(_client(session)).list_products(published_only=True)
        assert session.requests[0]["where_conditions"] == [
            {"column": "is_published", "op": "eq", "value": True},
            {"column": "availability_status", "op": "eq", "value": "IN_STOCK"},
        ]

    def test_variant_mapping(self):
        session = _routed({("select", "product_variants"): [
            {"id": "1-xl", "product_id": "1", "title": "X-Large", "price": 319.99,
             "compare_at_price": None, "sku": "QFJ-XL", "taxable": True},
        ]})
        variant = TabularCatalogRepository(_client(session)).get_variant("1-xl")
        assert variant.price == Money(31999)
        assert variant.compare_at_price is None
        assert variant.sku == "QFJ-XL"

    def test_create_product_sends_only_set_columns(self):
        row = {"id": "p9", "name": "Cosmic Tee", "is_published": False, "availability_status": "IN_STOCK"}
        session = _routed({("insert", "products"): [row]})
        saved = TabularCatalogRepository(_client(session)).create_product(Product(id=None, name="Cosmic Tee"))
        assert session.requests[0]["data"] == [
            {"name": "Cosmic Tee", "is_published": False, "availability_status": "IN_STOCK"}
        ]
        assert saved.id == "p9"
