"""Application service: Checkout use case.

Turns an open cart into a placed order. Everything that can be checked
without the store is checked first and the cart is priced once. Only
then is the payment taken, for exactly the total the order records.
Five writes follow in a fixed order (customer, order, line items,
addresses, emptying the cart). The store offers no transaction across
them, so a failure part-way through is reported as a PartialOrderError
naming what was already written.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.application.dto import (
    AddressSpec,
    CheckoutResultDTO,
    CustomerSpec,
    LineItemDTO,
    OrderDTO,
)
from storefront.domain.exceptions import (
    NotFoundError,
    PartialOrderError,
    PersistenceError,
    ValidationError,
)
from storefront.domain.model.cart import CartLine
from storefront.domain.model.catalog import ProductVariant
from storefront.domain.model.order import Address, AddressType, Customer, LineItem
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.price_calculator import PriceCalculator

logger = structlog.get_logger(__name__)

# Takes the amount and the customer's email; returns a payment reference.
Charge = Callable[[Money, str], str]


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        catalog_repo: CatalogRepository,
        order_repo: OrderRepository,
        calculator: PriceCalculator,
    ) -> None:
        self._cart_repo = cart_repo
        self._catalog_repo = catalog_repo
        self._order_repo = order_repo
        self._calculator = calculator

    def handle(
        self,
        cart_id: str,
        customer: CustomerSpec,
        shipping_address: AddressSpec,
        billing_address: AddressSpec | None = None,
        notes: str | None = None,
        charge: Charge | None = None,
    ) -> CheckoutResultDTO:
        """Place an order for everything in the cart.

        Steps:
        1. Validate customer, addresses and the cart contents.
        2. Price the cart.
        3. Call ``charge`` with the total, if given.
        4. Write customer -> order -> line items -> addresses.
        5. Empty the cart.
        """
        new_customer = Customer(
            id=None,
            email=customer.email,
            first_name=customer.first_name,
            last_name=customer.last_name,
            phone=customer.phone,
        )
        addresses = [self._to_address(AddressType.SHIPPING, shipping_address)]
        if billing_address is not None:
            addresses.append(self._to_address(AddressType.BILLING, billing_address))

        missing = self._cart_repo.unavailable_variants(cart_id)
        if missing:
            raise NotFoundError(self._gone_message(missing))
        lines = self._cart_repo.list_lines(cart_id)
        if not lines:
            raise ValidationError("Cannot place an order for an empty cart")
        variants = self._resolve_variants(lines)

        breakdown = self._calculator.breakdown(lines)

        log = logger.bind(cart_id=cart_id)
        payment_reference = None
        if charge is not None:
            payment_reference = charge(breakdown.total, new_customer.email)
            log = log.bind(payment_reference=payment_reference)

        completed: list[str] = []

        # A failure here has written nothing, so it propagates as-is.
        saved_customer = self._order_repo.create_customer(new_customer)
        completed.append("customer")
        log = log.bind(customer_id=saved_customer.id)

        try:
            order = self._order_repo.create_order(
                saved_customer.id, cart_id, breakdown, notes=notes
            )
        except PersistenceError as exc:
            raise self._partial("order", completed, saved_customer.id, None, exc, log) from exc
        completed.append("order")
        log = log.bind(order_id=order.id)

        items = [
            LineItem(
                order_id=order.id,
                variant_id=line.variant_id,
                product_id=variants[line.variant_id].product_id,
                title=variants[line.variant_id].title,
                sku=variants[line.variant_id].sku,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in lines
        ]
        try:
            saved_items = self._order_repo.create_line_items(items)
        except PersistenceError as exc:
            raise self._partial(
                "line_items", completed, saved_customer.id, order.id, exc, log
            ) from exc
        completed.append("line_items")

        for address in addresses:
            address.order_id = order.id
        try:
            self._order_repo.create_addresses(addresses)
        except PersistenceError as exc:
            raise self._partial(
                "addresses", completed, saved_customer.id, order.id, exc, log
            ) from exc
        completed.append("addresses")

        try:
            self._cart_repo.clear_lines(cart_id)
        except PersistenceError as exc:
            raise self._partial(
                "cart", completed, saved_customer.id, order.id, exc, log
            ) from exc

        log.info("order_placed", total=str(order.total), lines=len(saved_items))
        return CheckoutResultDTO(
            order=OrderDTO.of(order),
            items=[LineItemDTO.of(item) for item in saved_items],
            payment_reference=payment_reference,
        )

    # --- Internal helpers -----------------------------------------------------

    def _resolve_variants(self, lines: list[CartLine]) -> dict[str, ProductVariant]:
        variants: dict[str, ProductVariant] = {}
        for line in lines:
            variant = self._catalog_repo.get_variant(line.variant_id)
            if variant is None:
                raise NotFoundError(self._gone_message([line.variant_id]))
            variants[line.variant_id] = variant
        return variants

    @staticmethod
    def _gone_message(variant_ids: list[str]) -> str:
        quoted = ", ".join(f"'{v}'" for v in variant_ids)
        if len(variant_ids) == 1:
            return f"Variant {quoted} in cart is no longer in the catalog"
        return f"Variants {quoted} in cart are no longer in the catalog"

    @staticmethod
    def _to_address(kind: AddressType, spec: AddressSpec) -> Address:
        return Address(
            type=kind,
            line1=spec.line1,
            city=spec.city,
            region=spec.region,
            postal_code=spec.postal_code,
            first_name=spec.first_name,
            last_name=spec.last_name,
            company=spec.company,
            phone=spec.phone,
            line2=spec.line2,
            country_code=spec.country_code,
        )

    @staticmethod
    def _partial(
        failed_step: str,
        completed: list[str],
        customer_id: str | None,
        order_id: str | None,
        cause: PersistenceError,
        log,
    ) -> PartialOrderError:
        log.error(
            "checkout_partially_written",
            failed_step=failed_step,
            completed_steps=list(completed),
            error=str(cause),
        )
        where = f"order #{order_id}" if order_id else f"customer {customer_id}"
        return PartialOrderError(
            f"Checkout stopped at '{failed_step}' after writing "
            f"{', '.join(completed)} ({where}): {cause}",
            failed_step=failed_step,
            completed_steps=tuple(completed),
            customer_id=customer_id,
            order_id=order_id,
        )
