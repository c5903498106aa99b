"""Tabular-API implementation of CatalogRepository."""

from __future__ import annotations

from storefront.domain.exceptions import NotFoundError, PersistenceError
from storefront.domain.model.catalog import AvailabilityStatus, Product, ProductVariant
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.infrastructure.persistence.tabular_client import (
    TabularClient,
    eq,
    order_by,
)
from storefront.infrastructure.persistence.wire import (
    compact,
    money_from_wire,
    money_to_wire,
    optional_money_from_wire,
)

_PRODUCT_COLUMNS = [
    "id", "name", "description", "image_url", "is_published",
    "availability_status", "tags", "created_at", "updated_at",
]
_VARIANT_COLUMNS = [
    "id", "product_id", "title", "description", "image_url", "sku", "price",
    "compare_at_price", "taxable", "created_at", "updated_at",
]


class TabularCatalogRepository(CatalogRepository):

    def __init__(self, client: TabularClient, currency: str = "USD") -> None:
        self._client = client
        self._currency = currency

    # --- CatalogRepository interface ------------------------------------------

    def list_products(self, published_only: bool = False) -> list[Product]:
        where = None
        if published_only:
            where = [
                eq("is_published", True),
                eq("availability_status", AvailabilityStatus.IN_STOCK.value),
            ]
        rows = self._client.select(
            "products", where=where, sort=[order_by("created_at", "DESC")]
        )
        return [self._to_product(raw) for raw in rows]

    def list_variants(self, product_id: str | None = None) -> list[ProductVariant]:
        where = [eq("product_id", product_id)] if product_id else None
        rows = self._client.select(
            "product_variants", where=where, sort=[order_by("price", "ASC")]
        )
        return [self._to_variant(raw) for raw in rows]

    def get_variant(self, variant_id: str) -> ProductVariant | None:
        rows = self._client.select("product_variants", where=[eq("id", variant_id)], limit=1)
        return self._to_variant(rows[0]) if rows else None

    def create_product(self, product: Product) -> Product:
        rows = self._client.insert(
            "products", [self._product_row(product)], returning=_PRODUCT_COLUMNS
        )
        if not rows:
            raise PersistenceError("Product insert returned no row")
        return self._to_product(rows[0])

    def update_product(self, product: Product) -> Product:
        rows = self._client.update(
            "products",
            self._product_row(product),
            where=[eq("id", product.id)],
            returning=_PRODUCT_COLUMNS,
        )
        if not rows:
            raise NotFoundError(f"Product with ID '{product.id}' not found")
        return self._to_product(rows[0])

    def create_variant(self, variant: ProductVariant) -> ProductVariant:
        rows = self._client.insert(
            "product_variants", [self._variant_row(variant)], returning=_VARIANT_COLUMNS
        )
        if not rows:
            raise PersistenceError("Variant insert returned no row")
        return self._to_variant(rows[0])

    def update_variant(self, variant: ProductVariant) -> ProductVariant:
        rows = self._client.update(
            "product_variants",
            self._variant_row(variant),
            where=[eq("id", variant.id)],
            returning=_VARIANT_COLUMNS,
        )
        if not rows:
            raise NotFoundError(f"Variant with ID '{variant.id}' not found")
        return self._to_variant(rows[0])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _product_row(product: Product) -> dict:
        return compact({
            "name": product.name,
            "description": product.description,
            "image_url": product.image_url,
            "is_published": product.is_published,
            "availability_status": product.availability_status.value,
            "tags": product.tags,
        })

    @staticmethod
    def _variant_row(variant: ProductVariant) -> dict:
        return compact({
            "product_id": variant.product_id,
            "title": variant.title,
            "description": variant.description,
            "image_url": variant.image_url,
            "sku": variant.sku,
            "price": money_to_wire(variant.price),
            "compare_at_price": money_to_wire(variant.compare_at_price),
            "taxable": variant.taxable,
        })

    @staticmethod
    def _to_product(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description"),
            image_url=raw.get("image_url"),
            is_published=bool(raw.get("is_published", False)),
            availability_status=AvailabilityStatus(
                raw.get("availability_status") or AvailabilityStatus.IN_STOCK.value
            ),
            tags=raw.get("tags"),
        )

    def _to_variant(self, raw: dict) -> ProductVariant:
        return ProductVariant(
            id=raw["id"],
            product_id=raw.get("product_id"),
            title=raw.get("title") or raw.get("sku") or raw["id"],
            price=money_from_wire(raw["price"], self._currency),
            sku=raw.get("sku"),
            description=raw.get("description"),
            image_url=raw.get("image_url"),
            compare_at_price=optional_money_from_wire(raw.get("compare_at_price"), self._currency),
            taxable=bool(raw.get("taxable", True)),
        )
