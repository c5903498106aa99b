"""Application service: Add To Cart use case.

Resolves the variant against the catalog, then hands its current price
to the consolidation service.
"""

from __future__ import annotations

from storefront.application.dto import CartLineDTO
from storefront.domain.exceptions import NotFoundError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.cart_consolidation_service import (
    CartConsolidationService,
)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        catalog_repo: CatalogRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._catalog_repo = catalog_repo

    def handle(self, cart_id: str, variant_id: str, quantity: int) -> CartLineDTO:
        variant = self._catalog_repo.get_variant(variant_id)
        if variant is None:
            raise NotFoundError(f"Variant not found: '{variant_id}'")

        svc = CartConsolidationService(self._cart_repo)
        line = svc.add_to_cart(cart_id, variant_id, quantity, variant.price)
        return CartLineDTO.of(line)
