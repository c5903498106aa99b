"""Application service: Save Product use case (admin).

Creates or updates a product together with its variants. Every variant
is validated before the first write so a bad variant never leaves a
half-saved product behind.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductSpec, VariantSpec
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.catalog import AvailabilityStatus, Product, ProductVariant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger(__name__)


class SaveProductHandler:

    def __init__(self, catalog_repo: CatalogRepository, currency: str = "USD") -> None:
        self._catalog_repo = catalog_repo
        self._currency = currency

    def handle(
        self,
        spec: ProductSpec,
        variant_specs: list[VariantSpec],
        product_id: str | None = None,
    ) -> tuple[Product, list[ProductVariant]]:
        product = Product(
            id=product_id,
            name=spec.name,
            description=spec.description,
            image_url=spec.image_url,
            is_published=spec.is_published,
            availability_status=self._availability(spec.availability_status),
            tags=spec.tags,
        )
        variants = [self._to_variant(v, product_id) for v in variant_specs]

        if product_id is None:
            product = self._catalog_repo.create_product(product)
        else:
            product = self._catalog_repo.update_product(product)

        saved: list[ProductVariant] = []
        for variant in variants:
            variant.product_id = product.id
            if variant.id is None:
                saved.append(self._catalog_repo.create_variant(variant))
            else:
                saved.append(self._catalog_repo.update_variant(variant))

        logger.info(
            "product_saved",
            product_id=product.id,
            created=product_id is None,
            variants=len(saved),
        )
        return product, saved

    # --- Mapping --------------------------------------------------------------

    def _to_variant(self, spec: VariantSpec, product_id: str | None) -> ProductVariant:
        compare_at = (
            Money.of(spec.compare_at_price, self._currency)
            if spec.compare_at_price
            else None
        )
        return ProductVariant(
            id=spec.id,
            product_id=product_id,
            title=spec.title,
            price=Money.of(spec.price, self._currency),
            sku=spec.sku,
            compare_at_price=compare_at,
            taxable=spec.taxable,
        )

    @staticmethod
    def _availability(raw: str) -> AvailabilityStatus:
        try:
            return AvailabilityStatus(raw.strip().upper())
        except ValueError:
            allowed = ", ".join(s.value for s in AvailabilityStatus)
            raise ValidationError(
                f"Unknown availability status {raw!r} (expected one of {allowed})"
            )
