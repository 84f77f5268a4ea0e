"""Application service: Adjust Inventory use case.

Manual stock corrections made by staff:

- ``received``:   stock arrived; optionally sets a new unit cost and
                  stamps ``last_restocked``.
- ``adjustment``: signed count correction.
- ``damaged``:    damaged or lost units; always removes stock.

Each adjustment is one mutation paired with one transaction.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from stockledger.domain.exceptions import EntityNotFoundError, ValidationError
from stockledger.domain.model.inventory import InventorySnapshot
from stockledger.domain.model.transaction import TransactionType
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.domain.service.inventory_mutation_service import (
    InventoryMutationService,
)
from stockledger.domain.service.product_locks import ProductLocks, shared_locks
from stockledger.domain.service.transaction_recorder import (
    DEFAULT_PREFIX,
    TransactionRecorder,
)


class AdjustmentKind(Enum):
    RECEIVED = "received"
    ADJUSTMENT = "adjustment"
    DAMAGED = "damaged"


class AdjustInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        transaction_repo: TransactionRepository,
        locks: ProductLocks | None = None,
        transaction_prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._mutations = InventoryMutationService(inventory_repo)
        self._recorder = TransactionRecorder(transaction_repo, transaction_prefix)
        self._locks = locks if locks is not None else shared_locks()

    def handle(
        self,
        product_id: str,
        quantity: int,
        kind: str = "received",
        unit_cost: Decimal | None = None,
        notes: str | None = None,
        created_by: str | None = None,
    ) -> InventorySnapshot:
        try:
            adjustment = AdjustmentKind(kind)
        except ValueError as exc:
            raise ValidationError(f"Unknown adjustment type '{kind}'") from exc

        if quantity == 0:
            raise ValidationError("Adjustment quantity must be non-zero")
        if unit_cost is not None and adjustment is not AdjustmentKind.RECEIVED:
            raise ValidationError("Unit cost can only be set when receiving stock")

        delta = -abs(quantity) if adjustment is AdjustmentKind.DAMAGED else quantity

        with self._locks.hold([product_id]):
            snapshot = self._inventory_repo.get_by_product_id(product_id)
            if snapshot is None:
                raise EntityNotFoundError(
                    f"No inventory record for product '{product_id}'"
                )

            updated = self._mutations.apply_change(
                snapshot,
                on_hand_delta=delta,
                unit_cost_override=unit_cost,
                mark_restocked=adjustment is AdjustmentKind.RECEIVED,
            )
            self._recorder.record(
                product_id,
                (
                    TransactionType.RECEIVED
                    if adjustment is AdjustmentKind.RECEIVED
                    else TransactionType.ADJUSTMENT
                ),
                delta,
                unit_cost=unit_cost if unit_cost is not None else snapshot.unit_cost,
                quantity_before=snapshot.quantity_on_hand,
                quantity_after=updated.quantity_on_hand,
                notes=notes or ("Damaged/lost" if adjustment is AdjustmentKind.DAMAGED else None),
                created_by=created_by,
            )

        return updated
