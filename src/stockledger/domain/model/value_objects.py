"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate coercion rules so loosely-typed input from callers
never reaches the inventory counters.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from stockledger.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity requested by a caller.

    Use ``Quantity.coerce()`` for raw input: anything that is not a
    finite number, or that truncates to zero or less, becomes 1.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def coerce(raw: object) -> Quantity:
        try:
            number = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return Quantity(1)
        if not math.isfinite(number):
            return Quantity(1)
        value = int(number)
        return Quantity(value if value > 0 else 1)


@dataclass(frozen=True)
class InventoryItemSpec:
    """One requested line: a product and a raw quantity.

    ``quantity`` is kept as given; planners normalise it with
    ``Quantity.coerce``.
    """

    product_id: str | None
    quantity: object = 1
    name: str | None = None

    @property
    def requested(self) -> Quantity:
        return Quantity.coerce(self.quantity)


def to_int(raw: object, default: int = 0) -> int:
    """Read a stored counter, falling back to *default* for junk values."""
    if raw is None or isinstance(raw, bool):
        return default
    try:
        number = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number)


def to_decimal(raw: object, default: Decimal = Decimal("0")) -> Decimal:
    """Read a stored decimal amount, falling back to *default*."""
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return default
    if not value.is_finite():
        return default
    return value


def parse_unit_cost(raw: str | float | int | Decimal) -> Decimal:
    """Parse a unit cost supplied by a user.

    Currency symbols and thousands separators are stripped
    (``"$1,250.50"`` -> ``Decimal("1250.50")``).
    """
    cleaned = "".join(ch for ch in str(raw) if ch.isdigit() or ch in ".-")
    try:
        value = Decimal(cleaned)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid unit cost: {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid unit cost: {raw!r}")
    if value < Decimal("0"):
        raise ValidationError(f"Unit cost cannot be negative, got {value}")
    return value
