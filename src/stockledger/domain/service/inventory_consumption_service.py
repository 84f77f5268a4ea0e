"""Domain service: Inventory Consumption.

Removes stock that was sold or used by a reference document, with the
same idempotency scheme as reservation: quantities already logged for
the reference document and consumption type are subtracted first.

Consumption never blocks on low stock.  The physical event has already
happened by the time this is called, so on hand is allowed to go
negative and the gap is reported as a shortage.  Any reservation made
for the same reference document is released as the stock leaves.
"""

from __future__ import annotations

from collections.abc import Iterable

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.results import (
    INVENTORY_NOT_INITIALIZED,
    PRODUCT_REFERENCE_MISSING,
    AppliedLine,
    ConsumptionResult,
    MissingLine,
    ShortageLine,
)
from stockledger.domain.model.transaction import CONSUMPTION_TYPES, TransactionType
from stockledger.domain.model.value_objects import InventoryItemSpec
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.domain.service.inventory_mutation_service import (
    InventoryMutationService,
)
from stockledger.domain.service.planning import PlanningCache
from stockledger.domain.service.product_locks import ProductLocks, shared_locks
from stockledger.domain.service.transaction_recorder import (
    DEFAULT_PREFIX,
    TransactionRecorder,
)
from stockledger.logging_config import get_logger

logger = get_logger("domain.consumption")


class InventoryConsumptionService:

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

    def consume(
        self,
        items: Iterable[InventoryItemSpec],
        type: TransactionType,
        reference_doc_id: str | None = None,
        reference_label: str | None = None,
        created_by: str | None = None,
        mark_sold: bool = True,
    ) -> ConsumptionResult:
        """Deduct the outstanding quantity of every item from on hand.

        ``type`` must be SOLD or USED.  Raises ValidationError otherwise.
        """
        if type not in CONSUMPTION_TYPES:
            raise ValidationError(
                f"Consumption type must be 'sold' or 'used', got '{type.value}'"
            )

        items = list(items)
        result = ConsumptionResult()
        cache = PlanningCache(self._inventory_repo, self._recorder, reference_doc_id)

        with self._locks.hold(item.product_id for item in items):
            for item in items:
                self._consume_item(
                    item,
                    type,
                    cache,
                    result,
                    reference_doc_id,
                    reference_label,
                    created_by,
                    mark_sold,
                )

        return result

    def _consume_item(
        self,
        item: InventoryItemSpec,
        type: TransactionType,
        cache: PlanningCache,
        result: ConsumptionResult,
        reference_doc_id: str | None,
        reference_label: str | None,
        created_by: str | None,
        mark_sold: bool,
    ) -> None:
        product_id = item.product_id
        if not product_id:
            result.missing.append(MissingLine(None, PRODUCT_REFERENCE_MISSING))
            return

        needed = item.requested.value
        inventory = cache.snapshot(product_id)
        if inventory is None:
            logger.warning("Cannot consume %s: inventory not initialized", product_id)
            result.missing.append(MissingLine(product_id, INVENTORY_NOT_INITIALIZED))
            return

        already_consumed = cache.applied(product_id, type)
        outstanding = max(0, needed - already_consumed)
        if outstanding <= 0:
            return

        # Reserved for this reference and not yet released by this call
        reserved_for_reference = cache.applied(product_id, TransactionType.RESERVED)

        on_hand = inventory.quantity_on_hand
        if on_hand < outstanding:
            logger.warning(
                "Shortage consuming %s: need %d, only %d on hand",
                inventory.display_name,
                outstanding,
                on_hand,
            )
            result.shortages.append(
                ShortageLine(
                    product_id=product_id,
                    required=outstanding,
                    on_hand=on_hand,
                    product_title=inventory.product_title,
                )
            )

        release = min(outstanding, reserved_for_reference)

        updated = self._mutations.apply_change(
            inventory,
            on_hand_delta=-outstanding,
            reserved_delta=-release,
            mark_sold=mark_sold,
        )
        verb = "Used" if type is TransactionType.USED else "Sold"
        self._recorder.record(
            product_id,
            type,
            outstanding,
            unit_cost=inventory.unit_cost,
            quantity_before=on_hand,
            quantity_after=updated.quantity_on_hand,
            reference=reference_label,
            reference_doc_id=reference_doc_id,
            notes=f"{verb} {item.name}" if item.name else None,
            created_by=created_by,
        )

        cache.set_applied(product_id, type, already_consumed + outstanding)
        cache.set_applied(
            product_id,
            TransactionType.RESERVED,
            max(0, reserved_for_reference - release),
        )
        cache.remember(updated)
        result.consumed.append(
            AppliedLine(product_id, outstanding, product_title=inventory.product_title)
        )
