"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Money is pre-formatted.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import LineItem, Order
from storefront.domain.model.pricing import PriceBreakdown


@dataclass(frozen=True)
class CustomerSpec:
    """Input: who is checking out."""

    email: str
    first_name: str
    last_name: str
    phone: str | None = None


@dataclass(frozen=True)
class AddressSpec:
    """Input: a postal address as typed into the checkout form."""

    line1: str
    city: str
    region: str
    postal_code: str
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    phone: str | None = None
    line2: str | None = None
    country_code: str | None = None


@dataclass(frozen=True)
class ProductSpec:
    name: str
    description: str | None = None
    image_url: str | None = None
    is_published: bool = False
    availability_status: str = "IN_STOCK"
    tags: str | None = None


@dataclass(frozen=True)
class VariantSpec:
    title: str
    price: str
    id: str | None = None
    sku: str | None = None
    compare_at_price: str | None = None
    taxable: bool = True


@dataclass(frozen=True)
class BreakdownDTO:
    subtotal: str
    shipping: str
    tax: str
    total: str

    @staticmethod
    def of(breakdown: PriceBreakdown) -> BreakdownDTO:
        return BreakdownDTO(
            subtotal=str(breakdown.subtotal),
            shipping=str(breakdown.shipping),
            tax=str(breakdown.tax),
            total=str(breakdown.total),
        )


@dataclass(frozen=True)
class CartLineDTO:
    variant_id: str
    quantity: int
    unit_price: str  # formatted, e.g. "$299.99"
    line_total: str

    @staticmethod
    def of(line: CartLine) -> CartLineDTO:
        return CartLineDTO(
            variant_id=line.variant_id,
            quantity=line.quantity.value,
            unit_price=str(line.unit_price),
            line_total=str(line.line_total),
        )


@dataclass(frozen=True)
class CartDTO:
    cart_id: str
    lines: list[CartLineDTO]
    item_count: int
    breakdown: BreakdownDTO
    unavailable: tuple[str, ...] = ()  # variant IDs that can no longer be priced


@dataclass(frozen=True)
class LineItemDTO:
    title: str
    sku: str | None
    quantity: int
    unit_price: str
    total_price: str

    @staticmethod
    def of(item: LineItem) -> LineItemDTO:
        return LineItemDTO(
            title=item.title or item.variant_id,
            sku=item.sku,
            quantity=item.quantity.value,
            unit_price=str(item.unit_price),
            total_price=str(item.total_price),
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order as displayed in the back-office."""

    id: str
    customer_id: str | None
    status: str
    currency: str
    breakdown: BreakdownDTO
    created_at: str
    notes: str | None = None

    @staticmethod
    def of(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_id=order.customer_id,
            status=order.status.value,
            currency=order.currency,
            # Stored amounts are shown as written, even if they do not add up.
            breakdown=BreakdownDTO(
                subtotal=str(order.subtotal),
                shipping=str(order.shipping),
                tax=str(order.tax),
                total=str(order.total),
            ),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            notes=order.notes,
        )


@dataclass(frozen=True)
class CheckoutResultDTO:
    order: OrderDTO
    items: list[LineItemDTO]
    payment_reference: str | None = None


@dataclass(frozen=True)
class OrdersOverviewDTO:
    orders: list[OrderDTO]
    total_revenue: str
    open_count: int  # PENDING or PROCESSING


@dataclass(frozen=True)
class ProductSummaryDTO:
    id: str
    name: str
    is_published: bool
    availability_status: str
    variant_count: int
    price_range: str
