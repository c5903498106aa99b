"""Tests for settings, composition and the payment stub."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import GUARDED, UNRESTRICTED
from storefront.domain.model.value_objects import Money
from storefront.infrastructure import bootstrap
from storefront.infrastructure.adapters.stub_payment import StubPaymentGateway
from storefront.infrastructure.config import Settings


@pytest.fixture
def fresh_settings(monkeypatch):
    bootstrap.settings.cache_clear()
    bootstrap.tabular_client.cache_clear()
    yield monkeypatch
    bootstrap.settings.cache_clear()
    bootstrap.tabular_client.cache_clear()


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("STOREFRONT_TAX_RATE", "STOREFRONT_SHIPPING_FLAT_RATE"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.shipping_flat_rate == Decimal("15.00")
        assert s.tax_rate == Decimal("0.08")
        assert s.strict_status_transitions is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_TAX_RATE", "0.0725")
        monkeypatch.setenv("STOREFRONT_STRICT_STATUS_TRANSITIONS", "true")
        s = Settings(_env_file=None)
        assert s.tax_rate == Decimal("0.0725")
        assert s.strict_status_transitions is True


class TestBootstrap:

    def test_price_calculator_uses_settings(self, fresh_settings):
        fresh_settings.setenv("STOREFRONT_SHIPPING_FLAT_RATE", "9.50")
        fresh_settings.setenv("STOREFRONT_CHARGE_SHIPPING_ON_EMPTY_CART", "false")
        calc = bootstrap.price_calculator()
        assert calc.shipping_policy.flat_rate == Money(950)
        assert calc.breakdown([]).total == Money(0)

    def test_transition_table_default_is_unrestricted(self, fresh_settings):
        fresh_settings.delenv("STOREFRONT_STRICT_STATUS_TRANSITIONS", raising=False)
        assert bootstrap.transition_table() is UNRESTRICTED

    def test_transition_table_strict(self, fresh_settings):
        fresh_settings.setenv("STOREFRONT_STRICT_STATUS_TRANSITIONS", "1")
        assert bootstrap.transition_table() is GUARDED

    def test_client_url(self, fresh_settings):
        fresh_settings.setenv("STOREFRONT_API_BASE_URL", "https://tables.example.test")
        fresh_settings.setenv("STOREFRONT_TENANT_ID", "shop-1")
        assert bootstrap.tabular_client().url == (
            "https://tables.example.test/tenants/shop-1/databases/default/execute"
        )


class TestStubPayment:

    def test_returns_test_reference(self):
        ref = StubPaymentGateway().charge(Money(74937), customer_email="zed@orbit.io")
        assert ref.startswith("pi_test_")

    def test_zero_amount_rejected(self):
        with pytest.raises(ValidationError):
            StubPaymentGateway().charge(Money(0), customer_email="zed@orbit.io")
