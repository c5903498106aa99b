"""Abstract repository for the product catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import Product, ProductVariant


class CatalogRepository(ABC):

    @abstractmethod
    def list_products(self, published_only: bool = False) -> list[Product]:
        """Return products, newest first.

        With ``published_only`` only products listed on the storefront
        (published and in stock) are returned.
        """

    @abstractmethod
    def list_variants(self, product_id: str | None = None) -> list[ProductVariant]:
        """Return variants, cheapest first, optionally for one product."""

    @abstractmethod
    def get_variant(self, variant_id: str) -> ProductVariant | None:
        """Return a variant by its ID, or None if not found."""

    @abstractmethod
    def create_product(self, product: Product) -> Product:
        """Persist a new product and return it with its assigned ID."""

    @abstractmethod
    def update_product(self, product: Product) -> Product:
        """Persist changes to an existing product."""

    @abstractmethod
    def create_variant(self, variant: ProductVariant) -> ProductVariant:
        """Persist a new variant and return it with its assigned ID."""

    @abstractmethod
    def update_variant(self, variant: ProductVariant) -> ProductVariant:
        """Persist changes to an existing variant."""
