"""Unit tests for order statuses, transition tables and the lifecycle service."""

import pytest

from storefront.domain.exceptions import PersistenceError, ValidationError
from storefront.domain.model.order import GUARDED, UNRESTRICTED, Order, OrderStatus
from storefront.domain.model.pricing import PriceBreakdown
from storefront.domain.model.value_objects import Money
from storefront.domain.service.order_lifecycle_service import OrderLifecycleService
from tests.fakes import FakeOrderRepository


def _placed_order(order_id: str = "ord-1") -> Order:
    breakdown = PriceBreakdown(Money(67997), Money(1500), Money(5440), Money(74937))
    return Order.placed(order_id, "cust-1", "cart-1", breakdown)


def _setup(table=UNRESTRICTED):
    order = _placed_order()
    repo = FakeOrderRepository([order])
    return OrderLifecycleService(repo, table), repo, repo.get_by_id(order.id)


class TestOrderStatus:

    def test_new_orders_are_pending(self):
        assert _placed_order().status is OrderStatus.PENDING

    def test_on_hold_wire_value(self):
        assert OrderStatus.ON_HOLD.value == "ON-HOLD"

    @pytest.mark.parametrize("raw", ["ON-HOLD", "on_hold", " On-Hold "])
    def test_parse_accepts_value_or_name(self, raw):
        assert OrderStatus.parse(raw) is OrderStatus.ON_HOLD

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            OrderStatus.parse("SHIPPED")


class TestTransitionTables:

    @pytest.mark.parametrize("current", list(OrderStatus))
    @pytest.mark.parametrize("new", list(OrderStatus))
    def test_unrestricted_allows_everything(self, current, new):
        assert UNRESTRICTED.allows(current, new)

    def test_guarded_allows_forward_moves(self):
        assert GUARDED.allows(OrderStatus.PENDING, OrderStatus.PROCESSING)
        assert GUARDED.allows(OrderStatus.PROCESSING, OrderStatus.COMPLETED)
        assert GUARDED.allows(OrderStatus.COMPLETED, OrderStatus.REFUNDED)

    def test_guarded_rejects_reopening_completed_order(self):
        assert not GUARDED.allows(OrderStatus.COMPLETED, OrderStatus.PENDING)

    def test_archived_is_terminal_when_guarded(self):
        assert GUARDED.targets(OrderStatus.ARCHIVED) == frozenset()

    def test_check_raises(self):
        with pytest.raises(ValidationError, match="from ARCHIVED to PENDING"):
            GUARDED.check(OrderStatus.ARCHIVED, OrderStatus.PENDING)


class TestSetStatus:

    def test_persists_then_updates_in_memory(self):
        svc, repo, order = _setup()
        svc.set_status(order, OrderStatus.PROCESSING)
        assert order.status is OrderStatus.PROCESSING
        assert repo.get_by_id(order.id).status is OrderStatus.PROCESSING

    def test_unrestricted_allows_backwards_move(self):
        svc, _, order = _setup()
        svc.set_status(order, OrderStatus.ARCHIVED)
        svc.set_status(order, OrderStatus.PENDING)
        assert order.status is OrderStatus.PENDING

    def test_failed_write_leaves_status_unchanged(self):
        svc, repo, order = _setup()
        repo.fail_on("update_status")
        with pytest.raises(PersistenceError):
            svc.set_status(order, OrderStatus.COMPLETED)
        assert order.status is OrderStatus.PENDING
        assert repo.get_by_id(order.id).status is OrderStatus.PENDING

    def test_guarded_rejects_before_store_call(self):
        svc, repo, order = _setup(GUARDED)
        with pytest.raises(ValidationError):
            svc.set_status(order, OrderStatus.REFUNDED)
        assert "update_status" not in repo.calls
        assert order.status is OrderStatus.PENDING

    def test_monetary_fields_untouched(self):
        svc, _, order = _setup()
        svc.set_status(order, OrderStatus.CANCELLED)
        assert order.total == Money(74937)
        assert order.breakdown.subtotal == Money(67997)
