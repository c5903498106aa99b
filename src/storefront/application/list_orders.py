"""Application service: List Orders use case (admin query)."""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, OrdersOverviewDTO
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)

_OPEN_STATUSES = (OrderStatus.PENDING, OrderStatus.PROCESSING)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, currency: str = "USD") -> None:
        self._order_repo = order_repo
        self._currency = currency

    def handle(self) -> OrdersOverviewDTO:
        """List every order, newest first.

        Revenue only counts orders in the store currency; any others are
        still listed but left out of the sum.
        """
        orders = self._order_repo.list_all()

        revenue = Money.zero(self._currency)
        for order in orders:
            if order.currency != self._currency:
                logger.warning(
                    "order_excluded_from_revenue",
                    order_id=order.id,
                    currency=order.currency,
                    expected=self._currency,
                )
                continue
            revenue = revenue + order.total

        return OrdersOverviewDTO(
            orders=[OrderDTO.of(order) for order in orders],
            total_revenue=str(revenue),
            open_count=sum(1 for o in orders if o.status in _OPEN_STATUSES),
        )
