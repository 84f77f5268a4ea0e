"""InventoryTransaction: one immutable entry in the transaction log.

Transactions are never updated or deleted.  Summing them per product,
reference document and type is how planners find out how much of a
request has already been applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class TransactionType(Enum):
    RECEIVED = "received"
    SOLD = "sold"
    USED = "used"
    ADJUSTMENT = "adjustment"
    RESERVED = "reserved"
    MANUFACTURED = "manufactured"


CONSUMPTION_TYPES = (TransactionType.SOLD, TransactionType.USED)


@dataclass(frozen=True)
class InventoryTransaction:

    id: str
    transaction_number: str
    product_id: str
    type: TransactionType
    quantity: int
    quantity_before: int | None = None
    quantity_after: int | None = None
    unit_cost: Decimal | None = None
    reference_doc_id: str | None = None
    reference: str | None = None
    notes: str | None = None
    created_by: str | None = None
    transaction_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_value(self) -> Decimal | None:
        if self.unit_cost is None:
            return None
        return self.unit_cost * self.quantity
