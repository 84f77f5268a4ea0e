"""Domain service: Inventory Reservation.

Earmarks stock for a reference document (order, work order) without
removing it from on hand.  Reservation is idempotent per reference
document: the quantity already reserved for it is read back from the
transaction log, and only the outstanding difference is reserved, so
re-running the same request tops up instead of double-counting.

Items are processed one at a time and independently.  An item that is
missing or short is reported in the result and never rolls back the
items already reserved.
"""

from __future__ import annotations

from collections.abc import Iterable

from stockledger.domain.model.results import (
    INVENTORY_NOT_INITIALIZED,
    PRODUCT_REFERENCE_MISSING,
    AppliedLine,
    InsufficientLine,
    MissingLine,
    ReservationResult,
)
from stockledger.domain.model.transaction import TransactionType
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

logger = get_logger("domain.reservation")


class InventoryReservationService:

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

    def reserve(
        self,
        items: Iterable[InventoryItemSpec],
        reference_doc_id: str | None = None,
        reference_label: str | None = None,
        created_by: str | None = None,
    ) -> ReservationResult:
        """Reserve the outstanding quantity of every item.

        For each item:
          1. No inventory record -> ``missing``.
          2. Subtract what is already reserved for ``reference_doc_id``;
             nothing outstanding -> skipped silently.
          3. Not enough available stock for the outstanding amount ->
             ``insufficient``; nothing is reserved for that item.
          4. Otherwise reserve the outstanding amount and log it.
        """
        items = list(items)
        result = ReservationResult()
        cache = PlanningCache(self._inventory_repo, self._recorder, reference_doc_id)

        with self._locks.hold(item.product_id for item in items):
            for item in items:
                self._reserve_item(
                    item, cache, result, reference_doc_id, reference_label, created_by
                )

        return result

    def _reserve_item(
        self,
        item: InventoryItemSpec,
        cache: PlanningCache,
        result: ReservationResult,
        reference_doc_id: str | None,
        reference_label: str | None,
        created_by: str | None,
    ) -> None:
        product_id = item.product_id
        if not product_id:
            result.missing.append(MissingLine(None, PRODUCT_REFERENCE_MISSING))
            return

        needed = item.requested.value
        inventory = cache.snapshot(product_id)
        if inventory is None:
            logger.warning("Cannot reserve %s: inventory not initialized", product_id)
            result.missing.append(MissingLine(product_id, INVENTORY_NOT_INITIALIZED))
            return

        already_reserved = cache.applied(product_id, TransactionType.RESERVED)
        outstanding = max(0, needed - already_reserved)
        if outstanding <= 0:
            logger.debug(
                "%s already has %d reserved for %s; nothing to do",
                product_id,
                already_reserved,
                reference_doc_id,
            )
            return

        available = inventory.quantity_on_hand - inventory.quantity_reserved
        if available < outstanding:
            logger.warning(
                "Insufficient inventory for %s (need %d, have %d available)",
                inventory.display_name,
                outstanding,
                available,
            )
            result.insufficient.append(
                InsufficientLine(
                    product_id=product_id,
                    required=needed,
                    available=available,
                    product_title=inventory.product_title,
                )
            )
            return

        updated = self._mutations.apply_change(inventory, reserved_delta=outstanding)
        self._recorder.record(
            product_id,
            TransactionType.RESERVED,
            outstanding,
            unit_cost=inventory.unit_cost,
            quantity_before=inventory.quantity_on_hand,
            quantity_after=inventory.quantity_on_hand,
            reference=reference_label,
            reference_doc_id=reference_doc_id,
            notes=f"Reserved for {item.name}" if item.name else None,
            created_by=created_by,
        )

        cache.set_applied(product_id, TransactionType.RESERVED, already_reserved + outstanding)
        cache.remember(updated)
        result.reserved.append(
            AppliedLine(product_id, outstanding, product_title=inventory.product_title)
        )
