"""Per-call read cache shared by the reservation and consumption planners.

Lives for a single planner invocation only, so repeated lines for the
same product in one batch compose without re-querying storage.
"""

from __future__ import annotations

from stockledger.domain.model.inventory import InventorySnapshot
from stockledger.domain.model.transaction import TransactionType
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.transaction_recorder import TransactionRecorder

_MISSING = object()


class PlanningCache:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        recorder: TransactionRecorder,
        reference_doc_id: str | None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._recorder = recorder
        self._reference_doc_id = reference_doc_id or None
        self._snapshots: dict[str, InventorySnapshot | None] = {}
        self._sums: dict[tuple[str, TransactionType], int] = {}

    def snapshot(self, product_id: str) -> InventorySnapshot | None:
        cached = self._snapshots.get(product_id, _MISSING)
        if cached is _MISSING:
            cached = self._inventory_repo.get_by_product_id(product_id)
            self._snapshots[product_id] = cached
        return cached  # type: ignore[return-value]

    def remember(self, snapshot: InventorySnapshot) -> None:
        self._snapshots[snapshot.product_id] = snapshot

    def applied(self, product_id: str, type: TransactionType) -> int:
        """Quantity already logged for (product, reference document, type)."""
        key = (product_id, type)
        if key not in self._sums:
            self._sums[key] = self._recorder.sum_quantities(
                product_id, reference_doc_id=self._reference_doc_id, type=type
            )
        return self._sums[key]

    def set_applied(self, product_id: str, type: TransactionType, quantity: int) -> None:
        self._sums[(product_id, type)] = quantity
