"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from vinylstock.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount in minor currency units (kopecks, cents).

    Stored as an integer so prices and line totals never accumulate
    rounding errors.  The store trades in a single currency.
    """

    minor_units: int

    def __post_init__(self) -> None:
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise ValidationError(
                f"Money amount must be an integer number of minor units, "
                f"got {type(self.minor_units).__name__}"
            )
        if self.minor_units < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.minor_units}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.minor_units + other.minor_units)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.minor_units * factor)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.minor_units // 100}.{self.minor_units % 100:02d}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(0)

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse a major-unit amount such as ``"24.99"`` into minor units."""
        try:
            major = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not major.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        minor = (major * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return Money(int(minor))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    A stored line item never carries a zero or negative quantity.
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
