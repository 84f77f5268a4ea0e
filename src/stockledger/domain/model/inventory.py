"""InventorySnapshot aggregate: current stock state per product.

Each product has one snapshot holding its raw counters (on hand,
reserved, in production) plus the alert state derived from them.
Derived fields are stored alongside the counters so readers never
recompute them, and they are only ever produced by ``derive_state``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

OVERSTOCK_FACTOR = 3


class InventorySource(Enum):
    MANUFACTURED = "manufactured"
    PURCHASED = "purchased"
    DROPSHIP = "dropship"


@dataclass(frozen=True)
class DerivedState:
    quantity_available: int
    total_value: Decimal
    low_stock_alert: bool
    out_of_stock: bool
    overstocked: bool


def derive_state(
    quantity_on_hand: int,
    quantity_reserved: int,
    reorder_point: int,
    unit_cost: Decimal,
) -> DerivedState:
    """Compute availability, value and alert flags from raw counters."""
    available = quantity_on_hand - quantity_reserved
    return DerivedState(
        quantity_available=available,
        total_value=Decimal(quantity_on_hand) * unit_cost,
        low_stock_alert=available <= reorder_point,
        out_of_stock=available <= 0,
        overstocked=(
            reorder_point > 0 and quantity_on_hand > reorder_point * OVERSTOCK_FACTOR
        ),
    )


@dataclass(frozen=True)
class InventorySnapshot:
    """Aggregate root for stock tracking.

    Invariants:
    - ``quantity_reserved`` and ``quantity_in_production`` are never negative
    - derived fields always match ``derive_state`` of the raw counters

    Use ``InventorySnapshot.create()`` for new records and
    ``with_changes()`` for mutations; the plain constructor exists so
    repositories can reconstitute stored records as-is.
    """

    id: str
    product_id: str
    quantity_on_hand: int = 0
    quantity_reserved: int = 0
    quantity_available: int = 0
    quantity_in_production: int = 0
    reorder_point: int = 0
    reorder_quantity: int = 0
    unit_cost: Decimal = Decimal("0")
    total_value: Decimal = Decimal("0")
    low_stock_alert: bool = False
    out_of_stock: bool = False
    overstocked: bool = False
    product_title: str | None = None
    product_sku: str | None = None
    source: InventorySource | None = None
    last_restocked: datetime | None = None
    last_sold: datetime | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        product_id: str,
        quantity_on_hand: int = 0,
        reorder_point: int = 0,
        reorder_quantity: int = 0,
        unit_cost: Decimal = Decimal("0"),
        product_title: str | None = None,
        product_sku: str | None = None,
        source: InventorySource | None = None,
    ) -> InventorySnapshot:
        snapshot = InventorySnapshot(
            id=id,
            product_id=product_id,
            quantity_on_hand=quantity_on_hand,
            reorder_point=max(0, reorder_point),
            reorder_quantity=max(0, reorder_quantity),
            unit_cost=unit_cost,
            product_title=product_title,
            product_sku=product_sku,
            source=source,
        )
        return snapshot._rederived()

    # --- Mutation -------------------------------------------------------------

    def with_changes(
        self,
        on_hand_delta: int = 0,
        reserved_delta: int = 0,
        production_delta: int = 0,
        unit_cost_override: Decimal | None = None,
        restocked_at: datetime | None = None,
        sold_at: datetime | None = None,
    ) -> InventorySnapshot:
        """Return a copy with the deltas applied and derived state recomputed.

        Reserved and in-production counters are clamped at zero; on hand
        is allowed to go negative.
        """
        changed = replace(
            self,
            quantity_on_hand=self.quantity_on_hand + on_hand_delta,
            quantity_reserved=max(0, self.quantity_reserved + reserved_delta),
            quantity_in_production=max(
                0, self.quantity_in_production + production_delta
            ),
            unit_cost=(
                unit_cost_override if unit_cost_override is not None else self.unit_cost
            ),
            last_restocked=restocked_at or self.last_restocked,
            last_sold=sold_at or self.last_sold,
        )
        return changed._rederived()

    def with_configuration(
        self,
        reorder_point: int | None = None,
        reorder_quantity: int | None = None,
        product_title: str | None = None,
        product_sku: str | None = None,
        source: InventorySource | None = None,
    ) -> InventorySnapshot:
        """Return a copy with new thresholds/labels; counters are untouched."""
        changed = replace(
            self,
            reorder_point=(
                max(0, reorder_point) if reorder_point is not None else self.reorder_point
            ),
            reorder_quantity=(
                max(0, reorder_quantity)
                if reorder_quantity is not None
                else self.reorder_quantity
            ),
            product_title=product_title if product_title is not None else self.product_title,
            product_sku=product_sku if product_sku is not None else self.product_sku,
            source=source if source is not None else self.source,
        )
        return changed._rederived()

    def _rederived(self) -> InventorySnapshot:
        derived = derive_state(
            self.quantity_on_hand,
            self.quantity_reserved,
            self.reorder_point,
            self.unit_cost,
        )
        return replace(
            self,
            quantity_available=derived.quantity_available,
            total_value=derived.total_value,
            low_stock_alert=derived.low_stock_alert,
            out_of_stock=derived.out_of_stock,
            overstocked=derived.overstocked,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def display_name(self) -> str:
        return self.product_title or self.product_id

    @property
    def needs_reorder(self) -> bool:
        """True when current counters put the product at or below its reorder point."""
        return (self.quantity_on_hand - self.quantity_reserved) <= self.reorder_point
