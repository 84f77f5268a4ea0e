"""Application service: Reorder Check use case.

Sweeps every snapshot and:

1. refreshes the derived alert state of any record whose stored
   ``low_stock_alert`` no longer matches its counters;
2. for low-stock manufactured products with nothing in production,
   schedules a production run of ``reorder_quantity`` units;
3. for low-stock purchased/dropship products, raises a purchase alert.

Sending the alerts anywhere is left to the caller; the report is logged.
"""

from __future__ import annotations

from stockledger.application.dto import ReorderReport
from stockledger.domain.model.inventory import InventorySnapshot, InventorySource
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.domain.service.inventory_mutation_service import (
    InventoryMutationService,
)
from stockledger.domain.service.manufacturing_service import ManufacturingService
from stockledger.domain.service.product_locks import ProductLocks, shared_locks
from stockledger.logging_config import get_logger

logger = get_logger("application.reorder_check")

_PURCHASED_SOURCES = (InventorySource.PURCHASED, InventorySource.DROPSHIP)


class ReorderCheckHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        transaction_repo: TransactionRepository,
        locks: ProductLocks | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._locks = locks if locks is not None else shared_locks()
        self._mutations = InventoryMutationService(inventory_repo)
        self._manufacturing = ManufacturingService(
            inventory_repo, transaction_repo, self._locks
        )

    def handle(self, schedule_production: bool = True) -> ReorderReport:
        report = ReorderReport()

        for listed in self._inventory_repo.list_all():
            report.processed += 1
            with self._locks.hold([listed.product_id]):
                snapshot = self._inventory_repo.get_by_id(listed.id) or listed
                if snapshot.needs_reorder != snapshot.low_stock_alert:
                    snapshot = self._mutations.apply_change(snapshot)
                    report.alerts_changed += 1

                if not snapshot.needs_reorder:
                    continue

                if snapshot.source is InventorySource.MANUFACTURED:
                    if schedule_production and snapshot.quantity_in_production == 0:
                        self._schedule(snapshot, report)
                elif snapshot.source in _PURCHASED_SOURCES:
                    report.purchase_alerts.append(
                        f"{snapshot.display_name} • Available "
                        f"{max(0, snapshot.quantity_available)} / Reorder "
                        f"{snapshot.reorder_point}"
                    )

        logger.info(
            "Reorder check processed %d records: %d production runs, %d purchase alerts",
            report.processed,
            len(report.production_scheduled),
            len(report.purchase_alerts),
        )
        return report

    def _schedule(self, snapshot: InventorySnapshot, report: ReorderReport) -> None:
        quantity = max(1, snapshot.reorder_quantity)
        self._manufacturing.schedule_production(quantity, inventory_id=snapshot.id)
        report.production_scheduled.append(
            f"{snapshot.display_name} ({quantity} units)"
        )
