"""Application service: Consume Inventory use case.

Used when an order ships (``sold``) or a work order uses parts
(``used``).  Shortages are reported, never blocking.
"""

from __future__ import annotations

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.results import ConsumptionResult
from stockledger.domain.model.transaction import TransactionType
from stockledger.domain.model.value_objects import InventoryItemSpec
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.domain.service.inventory_consumption_service import (
    InventoryConsumptionService,
)
from stockledger.domain.service.product_locks import ProductLocks
from stockledger.domain.service.transaction_recorder import DEFAULT_PREFIX


class ConsumeInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        transaction_repo: TransactionRepository,
        locks: ProductLocks | None = None,
        transaction_prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._service = InventoryConsumptionService(
            inventory_repo, transaction_repo, locks, transaction_prefix
        )

    def handle(
        self,
        items: list[InventoryItemSpec],
        consumption_type: str = "sold",
        reference_doc_id: str | None = None,
        reference_label: str | None = None,
        created_by: str | None = None,
        mark_sold: bool = True,
    ) -> ConsumptionResult:
        try:
            type_ = TransactionType(consumption_type)
        except ValueError as exc:
            raise ValidationError(
                f"Consumption type must be 'sold' or 'used', got '{consumption_type}'"
            ) from exc

        return self._service.consume(
            items,
            type_,
            reference_doc_id=reference_doc_id,
            reference_label=reference_label or reference_doc_id,
            created_by=created_by,
            mark_sold=mark_sold,
        )
