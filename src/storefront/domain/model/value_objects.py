"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

_MINOR_PER_MAJOR = 100
_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Monetary amount held as an integer count of minor units (cents).

    Decimal is only used at the edges (parsing, display, the wire) so
    totals are reproducible to the cent.
    """

    minor_units: int
    currency: str = "USD"

    def __post_init__(self) -> None:
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise ValidationError(
                f"Money minor units must be an int, got {type(self.minor_units).__name__}"
            )
        if self.minor_units < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.minor_units} minor units"
            )

    @property
    def amount(self) -> Decimal:
        """The display value, e.g. ``Decimal("749.37")``."""
        return (Decimal(self.minor_units) / _MINOR_PER_MAJOR).quantize(_CENT)

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.minor_units + other.minor_units, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.minor_units * factor, self.currency)

    def apply_rate(self, rate: Decimal) -> Money:
        """Multiply by a fractional rate, rounding half-to-even to the cent."""
        scaled = (Decimal(self.minor_units) * rate).quantize(
            Decimal("1"), rounding=ROUND_HALF_EVEN
        )
        return Money(int(scaled), self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units < other.minor_units

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units <= other.minor_units

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units > other.minor_units

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units >= other.minor_units

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:,.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(0, currency)

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Parse a major-unit amount such as ``"299.99"`` or ``15``.

        Anything finer than one cent is rejected rather than rounded.
        """
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")

        minor = value * _MINOR_PER_MAJOR
        if minor != minor.to_integral_value():
            raise ValidationError(
                f"Money amount {amount!r} has more than two decimal places"
            )
        return Money(int(minor), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
