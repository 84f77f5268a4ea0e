"""Application service: Reserve Inventory use case."""

from __future__ import annotations

from stockledger.domain.model.results import ReservationResult
from stockledger.domain.model.value_objects import InventoryItemSpec
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from stockledger.domain.service.product_locks import ProductLocks
from stockledger.domain.service.transaction_recorder import DEFAULT_PREFIX


class ReserveInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        transaction_repo: TransactionRepository,
        locks: ProductLocks | None = None,
        transaction_prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._service = InventoryReservationService(
            inventory_repo, transaction_repo, locks, transaction_prefix
        )

    def handle(
        self,
        items: list[InventoryItemSpec],
        reference_doc_id: str | None = None,
        reference_label: str | None = None,
        created_by: str | None = None,
    ) -> ReservationResult:
        """Reserve stock for a reference document (e.g. an order or work order).

        Safe to re-run for the same ``reference_doc_id``: only quantities
        not yet reserved for it are added.
        """
        return self._service.reserve(
            items,
            reference_doc_id=reference_doc_id,
            reference_label=reference_label or reference_doc_id,
            created_by=created_by,
        )
