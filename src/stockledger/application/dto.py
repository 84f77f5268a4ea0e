"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class InventoryLineDTO:
    """Output: one snapshot as displayed to the user."""

    product_id: str
    product_name: str
    on_hand: int
    reserved: int
    available: int
    in_production: int
    reorder_point: int
    unit_cost: str  # formatted, e.g. "$15.00"
    total_value: str
    flags: list[str]


@dataclass(frozen=True)
class TransactionLineDTO:
    """Output: one transaction log entry."""

    transaction_number: str
    type: str
    quantity: int
    quantity_before: int | None
    quantity_after: int | None
    reference: str
    notes: str
    created_by: str
    transaction_date: str


@dataclass
class ReorderReport:
    """Output of the reorder check."""

    processed: int = 0
    alerts_changed: int = 0
    production_scheduled: list[str] = field(default_factory=list)
    purchase_alerts: list[str] = field(default_factory=list)
