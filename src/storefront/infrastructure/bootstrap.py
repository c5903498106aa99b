"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.domain.model.order import GUARDED, UNRESTRICTED, TransitionTable
from storefront.domain.model.pricing import FlatRateShipping, FlatRateTax
from storefront.domain.model.value_objects import Money
from storefront.domain.service.price_calculator import PriceCalculator
from storefront.infrastructure.adapters.stub_payment import StubPaymentGateway
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.persistence.tabular_cart_repository import (
    TabularCartRepository,
)
from storefront.infrastructure.persistence.tabular_catalog_repository import (
    TabularCatalogRepository,
)
from storefront.infrastructure.persistence.tabular_client import TabularClient
from storefront.infrastructure.persistence.tabular_order_repository import (
    TabularOrderRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def tabular_client() -> TabularClient:
    s = settings()
    return TabularClient(
        base_url=s.api_base_url,
        tenant_id=s.tenant_id,
        database=s.database,
        timeout=s.request_timeout_seconds,
    )


def cart_repository() -> TabularCartRepository:
    return TabularCartRepository(tabular_client(), currency=settings().currency)


def catalog_repository() -> TabularCatalogRepository:
    return TabularCatalogRepository(tabular_client(), currency=settings().currency)


def order_repository() -> TabularOrderRepository:
    return TabularOrderRepository(tabular_client())


def price_calculator() -> PriceCalculator:
    s = settings()
    return PriceCalculator(
        shipping_policy=FlatRateShipping(
            Money.of(s.shipping_flat_rate, s.currency),
            charge_empty_cart=s.charge_shipping_on_empty_cart,
        ),
        tax_policy=FlatRateTax(s.tax_rate),
        currency=s.currency,
    )


def transition_table() -> TransitionTable:
    return GUARDED if settings().strict_status_transitions else UNRESTRICTED


def payment_gateway() -> StubPaymentGateway:
    return StubPaymentGateway()
