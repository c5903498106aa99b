"""Application service: List Catalog use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductSummaryDTO
from storefront.domain.model.catalog import ProductVariant
from storefront.domain.repository.catalog_repository import CatalogRepository


class ListCatalogHandler:

    def __init__(self, catalog_repo: CatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def handle(self, published_only: bool = False) -> list[ProductSummaryDTO]:
        products = self._catalog_repo.list_products(published_only=published_only)

        by_product: dict[str, list[ProductVariant]] = {}
        for variant in self._catalog_repo.list_variants():
            by_product.setdefault(variant.product_id, []).append(variant)

        return [
            ProductSummaryDTO(
                id=p.id,  # type: ignore[arg-type]
                name=p.name,
                is_published=p.is_published,
                availability_status=p.availability_status.value,
                variant_count=len(by_product.get(p.id, [])),
                price_range=self._price_range(by_product.get(p.id, [])),
            )
            for p in products
        ]

    @staticmethod
    def _price_range(variants: list[ProductVariant]) -> str:
        if not variants:
            return "No variants"
        low = min(v.price for v in variants)
        high = max(v.price for v in variants)
        if low == high:
            return str(low)
        return f"{low} - {high}"
