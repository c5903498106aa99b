"""Catalog aggregates: products and their purchasable variants.

Products live independently of carts and orders. A variant is the priced
SKU (a size, a fit); carts and orders only ever reference variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


class AvailabilityStatus(Enum):
    IN_STOCK = "IN_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    DISCONTINUED = "DISCONTINUED"


@dataclass
class Product:
    """A product in the catalog.

    ``id`` is None until the store assigns one.
    """

    id: str | None
    name: str
    description: str | None = None
    image_url: str | None = None
    is_published: bool = False
    availability_status: AvailabilityStatus = AvailabilityStatus.IN_STOCK
    tags: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        self.name = self.name.strip()

    @property
    def is_listed(self) -> bool:
        """Visible on the public storefront."""
        return self.is_published and self.availability_status is AvailabilityStatus.IN_STOCK


@dataclass
class ProductVariant:
    id: str | None
    product_id: str | None
    title: str
    price: Money
    sku: str | None = None
    description: str | None = None
    image_url: str | None = None
    compare_at_price: Money | None = None
    taxable: bool = True

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Variant title is required")
        self.title = self.title.strip()
