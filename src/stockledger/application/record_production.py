"""Application services: production scheduling and completion."""

from __future__ import annotations

from stockledger.domain.model.inventory import InventorySnapshot
from stockledger.domain.model.results import ManufactureResult
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.domain.service.manufacturing_service import ManufacturingService
from stockledger.domain.service.product_locks import ProductLocks
from stockledger.domain.service.transaction_recorder import DEFAULT_PREFIX


class RecordProductionHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        transaction_repo: TransactionRepository,
        locks: ProductLocks | None = None,
        transaction_prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._service = ManufacturingService(
            inventory_repo, transaction_repo, locks, transaction_prefix
        )

    def handle(
        self,
        product_id: str,
        quantity: int,
        reference_doc_id: str | None = None,
        reference_label: str | None = None,
        created_by: str | None = None,
    ) -> ManufactureResult:
        """Record a completed production run.

        Call exactly once per completed run; repeated calls add stock again.
        """
        return self._service.record_manufactured(
            product_id,
            quantity,
            reference_doc_id=reference_doc_id,
            reference_label=reference_label or reference_doc_id,
            created_by=created_by,
        )


class ScheduleProductionHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        transaction_repo: TransactionRepository,
        locks: ProductLocks | None = None,
    ) -> None:
        self._service = ManufacturingService(inventory_repo, transaction_repo, locks)

    def handle(self, product_id: str, quantity: int) -> InventorySnapshot:
        return self._service.schedule_production(quantity, product_id=product_id)
