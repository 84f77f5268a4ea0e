"""Structured outcomes of the planners.

Per-item conditions that callers are expected to handle (not enough
stock, a shortage, no inventory record) are collected here instead of
being raised, so one bad item never stops the rest of a batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field

INVENTORY_NOT_INITIALIZED = "Inventory not initialized"
PRODUCT_REFERENCE_MISSING = "Product reference missing"
INVALID_PRODUCT_OR_QUANTITY = "Invalid product/quantity"


@dataclass(frozen=True)
class AppliedLine:
    """A quantity that was reserved, consumed or produced."""

    product_id: str
    quantity: int
    product_title: str | None = None


@dataclass(frozen=True)
class InsufficientLine:
    product_id: str
    required: int
    available: int
    product_title: str | None = None


@dataclass(frozen=True)
class ShortageLine:
    product_id: str
    required: int
    on_hand: int
    product_title: str | None = None


@dataclass(frozen=True)
class MissingLine:
    product_id: str | None
    reason: str


@dataclass
class ReservationResult:
    reserved: list[AppliedLine] = field(default_factory=list)
    insufficient: list[InsufficientLine] = field(default_factory=list)
    missing: list[MissingLine] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.insufficient and not self.missing


@dataclass
class ConsumptionResult:
    consumed: list[AppliedLine] = field(default_factory=list)
    shortages: list[ShortageLine] = field(default_factory=list)
    missing: list[MissingLine] = field(default_factory=list)


@dataclass
class ManufactureResult:
    produced: list[AppliedLine] = field(default_factory=list)
    missing: list[MissingLine] = field(default_factory=list)
