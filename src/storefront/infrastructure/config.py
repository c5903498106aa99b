"""Runtime settings, read from ``STOREFRONT_*`` environment variables or ``.env``."""

from __future__ import annotations

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hosted tabular-data API
    api_base_url: str = "https://api.genabase.com"
    tenant_id: str = "storefront"
    database: str = "default"
    request_timeout_seconds: float = 10.0

    # Pricing
    currency: str = "USD"
    shipping_flat_rate: Decimal = Decimal("15.00")
    tax_rate: Decimal = Decimal("0.08")
    charge_shipping_on_empty_cart: bool = True

    # Admin
    strict_status_transitions: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


def get_settings() -> Settings:
    return Settings()
