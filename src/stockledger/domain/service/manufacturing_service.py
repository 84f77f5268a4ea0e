"""Domain service: Manufacturing.

Moves units through production: ``schedule_production`` commits units
to a run (in-production counter only, no log entry) and
``record_manufactured`` moves finished units to on hand.

Completion is not idempotent.  Each call is one discrete completion
event and the workflow layer calls it once per finished run.
"""

from __future__ import annotations

from stockledger.domain.exceptions import EntityNotFoundError, ValidationError
from stockledger.domain.model.inventory import InventorySnapshot
from stockledger.domain.model.results import (
    INVALID_PRODUCT_OR_QUANTITY,
    INVENTORY_NOT_INITIALIZED,
    AppliedLine,
    ManufactureResult,
    MissingLine,
)
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
from stockledger.logging_config import get_logger

logger = get_logger("domain.manufacturing")


class ManufacturingService:

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

    def record_manufactured(
        self,
        product_id: str | None,
        quantity: int,
        reference_doc_id: str | None = None,
        reference_label: str | None = None,
        created_by: str | None = None,
    ) -> ManufactureResult:
        """Move *quantity* finished units from in production to on hand."""
        result = ManufactureResult()
        if not product_id or quantity <= 0:
            result.missing.append(MissingLine(product_id, INVALID_PRODUCT_OR_QUANTITY))
            return result

        with self._locks.hold([product_id]):
            inventory = self._inventory_repo.get_by_product_id(product_id)
            if inventory is None:
                logger.warning(
                    "Cannot record production for %s: inventory not initialized",
                    product_id,
                )
                result.missing.append(MissingLine(product_id, INVENTORY_NOT_INITIALIZED))
                return result

            updated = self._mutations.apply_change(
                inventory,
                on_hand_delta=quantity,
                production_delta=-quantity,
                mark_restocked=True,
            )
            self._recorder.record(
                product_id,
                TransactionType.MANUFACTURED,
                quantity,
                unit_cost=inventory.unit_cost,
                quantity_before=inventory.quantity_on_hand,
                quantity_after=updated.quantity_on_hand,
                reference=reference_label,
                reference_doc_id=reference_doc_id,
                notes="Production complete",
                created_by=created_by,
            )

        result.produced.append(
            AppliedLine(product_id, quantity, product_title=inventory.product_title)
        )
        return result

    def schedule_production(
        self,
        quantity: int,
        *,
        product_id: str | None = None,
        inventory_id: str | None = None,
    ) -> InventorySnapshot:
        """Commit *quantity* units to a production run.

        Raises ValidationError for a non-positive quantity and
        EntityNotFoundError when the snapshot does not exist.
        """
        if quantity <= 0:
            raise ValidationError("Production quantity must be positive")

        found: InventorySnapshot | None = None
        if inventory_id:
            found = self._inventory_repo.get_by_id(inventory_id)
        elif product_id:
            found = self._inventory_repo.get_by_product_id(product_id)
        if found is None:
            raise EntityNotFoundError(
                f"Inventory record not found "
                f"(inventory_id={inventory_id!r}, product_id={product_id!r})"
            )

        # Re-read under the lock; the lookup above only resolves the product
        with self._locks.hold([found.product_id]):
            updated = self._mutations.apply_change(
                inventory_id=found.id, production_delta=quantity
            )

        logger.info(
            "Scheduled %d units of %s for production (%d in production)",
            quantity,
            updated.display_name,
            updated.quantity_in_production,
        )
        return updated
