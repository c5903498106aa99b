"""Order aggregate: a frozen pricing snapshot plus a mutable status.

The Order owns its line items and addresses. After creation only the
status changes, and only through the lifecycle service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.pricing import PriceBreakdown
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    ON_HOLD = "ON-HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    FAILED = "FAILED"
    ARCHIVED = "ARCHIVED"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        """Accept either the wire value (``ON-HOLD``) or the name (``ON_HOLD``)."""
        text = raw.strip().upper()
        for status in cls:
            if text in (status.value, status.name):
                return status
        raise ValidationError(f"Unknown order status: {raw!r}")


class TransitionTable:
    """Which status changes an administrator may make.

    ``allowed`` maps each status to the set it may move to. A status
    missing from the map has no outgoing transitions.
    """

    def __init__(self, name: str, allowed: dict[OrderStatus, frozenset[OrderStatus]]) -> None:
        self.name = name
        self._allowed = allowed

    def allows(self, current: OrderStatus, new: OrderStatus) -> bool:
        return new in self._allowed.get(current, frozenset())

    def targets(self, current: OrderStatus) -> frozenset[OrderStatus]:
        return self._allowed.get(current, frozenset())

    def check(self, current: OrderStatus, new: OrderStatus) -> None:
        if not self.allows(current, new):
            raise ValidationError(
                f"Cannot move order from {current.value} to {new.value}"
            )


# Any status to any other, as the admin status selector has always behaved.
UNRESTRICTED = TransitionTable(
    "unrestricted",
    {status: frozenset(OrderStatus) for status in OrderStatus},
)

_S = OrderStatus
GUARDED = TransitionTable(
    "guarded",
    {
        _S.PENDING: frozenset({_S.PROCESSING, _S.ON_HOLD, _S.CANCELLED, _S.FAILED}),
        _S.PROCESSING: frozenset({_S.ON_HOLD, _S.COMPLETED, _S.CANCELLED, _S.FAILED}),
        _S.ON_HOLD: frozenset({_S.PROCESSING, _S.CANCELLED, _S.FAILED}),
        _S.COMPLETED: frozenset({_S.REFUNDED, _S.ARCHIVED}),
        _S.CANCELLED: frozenset({_S.ARCHIVED}),
        _S.REFUNDED: frozenset({_S.ARCHIVED}),
        _S.FAILED: frozenset({_S.PENDING, _S.ARCHIVED}),
        _S.ARCHIVED: frozenset(),
    },
)
del _S


@dataclass
class Customer:
    id: str | None
    email: str
    first_name: str
    last_name: str
    phone: str | None = None

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("email", "first_name", "last_name")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ValidationError(
                f"Missing required customer fields: {', '.join(missing)}"
            )
        if "@" not in self.email:
            raise ValidationError(f"Invalid email address: {self.email!r}")


class AddressType(Enum):
    SHIPPING = "SHIPPING"
    BILLING = "BILLING"


ADDRESS_REQUIRED_FIELDS = ("line1", "city", "region", "postal_code")


@dataclass
class Address:
    type: AddressType
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
    order_id: str | None = None

    def __post_init__(self) -> None:
        missing = [
            name for name in ADDRESS_REQUIRED_FIELDS
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ValidationError(
                f"Missing required {self.type.value.lower()} address fields: "
                f"{', '.join(missing)}"
            )


@dataclass(frozen=True)
class LineItem:
    """Frozen copy of a cart line attached to a placed order.

    Holds its own title and price so later catalog edits never reach it.
    """

    order_id: str
    variant_id: str
    quantity: Quantity
    unit_price: Money
    product_id: str | None = None
    title: str | None = None
    sku: str | None = None
    id: str | None = None

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    The four monetary fields are the breakdown captured at checkout and
    never change afterwards.
    """

    id: str
    customer_id: str | None
    cart_id: str | None
    subtotal: Money
    shipping: Money
    tax: Money
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def currency(self) -> str:
        return self.total.currency

    @property
    def breakdown(self) -> PriceBreakdown:
        """Rebuild the checkout breakdown; raises ValidationError if it does not add up."""
        return PriceBreakdown(
            subtotal=self.subtotal,
            shipping=self.shipping,
            tax=self.tax,
            total=self.total,
        )

    @staticmethod
    def placed(
        order_id: str,
        customer_id: str | None,
        cart_id: str | None,
        breakdown: PriceBreakdown,
        notes: str | None = None,
    ) -> Order:
        """Build a new PENDING order from a checkout breakdown."""
        return Order(
            id=order_id,
            customer_id=customer_id,
            cart_id=cart_id,
            subtotal=breakdown.subtotal,
            shipping=breakdown.shipping,
            tax=breakdown.tax,
            total=breakdown.total,
            notes=notes,
        )
