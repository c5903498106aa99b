"""Abstract repository for orders and the rows written at checkout."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import (
    Address,
    Customer,
    LineItem,
    Order,
    OrderStatus,
)
from storefront.domain.model.pricing import PriceBreakdown


class OrderRepository(ABC):

    @abstractmethod
    def create_customer(self, customer: Customer) -> Customer:
        """Persist a customer and return it with its assigned ID."""

    @abstractmethod
    def create_order(
        self,
        customer_id: str,
        cart_id: str,
        breakdown: PriceBreakdown,
        notes: str | None = None,
    ) -> Order:
        """Persist a new PENDING order carrying the breakdown snapshot."""

    @abstractmethod
    def create_line_items(self, items: list[LineItem]) -> list[LineItem]:
        """Persist an order's line items."""

    @abstractmethod
    def create_addresses(self, addresses: list[Address]) -> list[Address]:
        """Persist an order's shipping and billing addresses."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        """Write a new status and return the order as stored."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""
