"""Application service: Update Order Status use case (admin)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import NotFoundError
from storefront.domain.model.order import OrderStatus, TransitionTable
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.order_lifecycle_service import OrderLifecycleService


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        transitions: TransitionTable,
    ) -> None:
        self._order_repo = order_repo
        self._transitions = transitions

    def handle(self, order_id: str, status: str) -> OrderDTO:
        new_status = OrderStatus.parse(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")

        svc = OrderLifecycleService(self._order_repo, self._transitions)
        svc.set_status(order, new_status)
        return OrderDTO.of(order)
