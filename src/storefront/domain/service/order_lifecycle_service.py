"""Domain service: Order Lifecycle.

Governs administrator status edits. The transition table decides which
moves are legal; the store must confirm the write before the in-memory
order changes, so a failed write never leaves a status the store does
not have.
"""

from __future__ import annotations

import structlog

from storefront.domain.model.order import UNRESTRICTED, Order, OrderStatus, TransitionTable
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class OrderLifecycleService:

    def __init__(
        self,
        order_repo: OrderRepository,
        transitions: TransitionTable = UNRESTRICTED,
    ) -> None:
        self._order_repo = order_repo
        self._transitions = transitions

    @property
    def transitions(self) -> TransitionTable:
        return self._transitions

    def set_status(self, order: Order, new_status: OrderStatus) -> Order:
        """Move ``order`` to ``new_status`` through the store.

        Raises ValidationError for a move the table forbids and lets
        PersistenceError through untouched; in both cases ``order`` keeps
        its previous status.
        """
        previous = order.status
        self._transitions.check(previous, new_status)

        stored = self._order_repo.update_status(order.id, new_status)

        order.status = stored.status
        logger.info(
            "order_status_changed",
            order_id=order.id,
            previous=previous.value,
            status=order.status.value,
            table=self._transitions.name,
        )
        return order
