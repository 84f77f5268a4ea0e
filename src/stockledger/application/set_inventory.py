"""Application service: Set Inventory use case.

Provisions the snapshot for a product, or updates its configuration
(reorder thresholds, source, labels).  Stock counters are never set
here; they only change through adjustments, reservations, consumption
and production.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.inventory import InventorySnapshot, InventorySource
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.product_locks import ProductLocks, shared_locks
from stockledger.logging_config import get_logger

logger = get_logger("application.set_inventory")


class SetInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        locks: ProductLocks | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._locks = locks if locks is not None else shared_locks()

    def handle(
        self,
        product_id: str,
        title: str | None = None,
        sku: str | None = None,
        reorder_point: int | None = None,
        reorder_quantity: int | None = None,
        unit_cost: Decimal | None = None,
        source: str | None = None,
    ) -> tuple[InventorySnapshot, bool]:
        """Create or reconfigure a product's snapshot.

        Returns the stored snapshot and whether it was newly created.
        """
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        product_id = product_id.strip()

        for label, value in (
            ("Reorder point", reorder_point),
            ("Reorder quantity", reorder_quantity),
        ):
            if value is not None and value < 0:
                raise ValidationError(f"{label} cannot be negative")

        inventory_source = self._parse_source(source)

        with self._locks.hold([product_id]):
            existing = self._inventory_repo.get_by_product_id(product_id)
            if existing is not None:
                if unit_cost is not None and unit_cost != existing.unit_cost:
                    raise ValidationError(
                        "Unit cost of existing inventory changes only when stock "
                        "is received"
                    )
                snapshot = existing.with_configuration(
                    reorder_point=reorder_point,
                    reorder_quantity=reorder_quantity,
                    product_title=title,
                    product_sku=sku,
                    source=inventory_source,
                )
                created = False
            else:
                snapshot = InventorySnapshot.create(
                    id=str(uuid.uuid4()),
                    product_id=product_id,
                    reorder_point=reorder_point or 0,
                    reorder_quantity=reorder_quantity or 0,
                    unit_cost=unit_cost if unit_cost is not None else Decimal("0"),
                    product_title=title,
                    product_sku=sku,
                    source=inventory_source,
                )
                created = True
            self._inventory_repo.save(snapshot)

        logger.info(
            "%s inventory for %s", "Created" if created else "Updated", product_id
        )
        return snapshot, created

    @staticmethod
    def _parse_source(raw: str | None) -> InventorySource | None:
        if raw is None:
            return None
        try:
            return InventorySource(raw.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(s.value for s in InventorySource)
            raise ValidationError(
                f"Unknown inventory source '{raw}' (expected one of: {allowed})"
            ) from exc
