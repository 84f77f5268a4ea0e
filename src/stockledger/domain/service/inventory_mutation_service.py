"""Domain service: Mutation Applier.

The only path by which snapshot counters change.  Every call applies
the deltas, recomputes the derived state and persists counters and
derived fields together in one ``patch``.

No transaction is written here; callers pair each change with a
``TransactionRecorder.record`` call, except for internal bookkeeping
such as pre-allocating in-production units.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from stockledger.domain.exceptions import EntityNotFoundError
from stockledger.domain.model.inventory import InventorySnapshot
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.logging_config import get_logger

logger = get_logger("domain.mutation")


class InventoryMutationService:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def apply_change(
        self,
        snapshot: InventorySnapshot | None = None,
        *,
        inventory_id: str | None = None,
        product_id: str | None = None,
        on_hand_delta: int = 0,
        reserved_delta: int = 0,
        production_delta: int = 0,
        unit_cost_override: Decimal | None = None,
        mark_restocked: bool = False,
        mark_sold: bool = False,
        timestamp: datetime | None = None,
    ) -> InventorySnapshot:
        """Apply deltas to a snapshot and persist the result.

        The snapshot is taken from *snapshot* if given, else looked up by
        *inventory_id*, else by *product_id*.

        Raises EntityNotFoundError if it cannot be resolved.
        """
        current = snapshot or self._resolve(inventory_id, product_id)

        now = timestamp or datetime.now(timezone.utc)
        updated = current.with_changes(
            on_hand_delta=on_hand_delta,
            reserved_delta=reserved_delta,
            production_delta=production_delta,
            unit_cost_override=unit_cost_override,
            restocked_at=now if mark_restocked else None,
            sold_at=now if mark_sold else None,
        )

        self._inventory_repo.patch(
            current.id, self._patch_fields(updated, mark_restocked, mark_sold)
        )
        logger.debug(
            "Applied inventory change to %s: on_hand %d -> %d, reserved %d -> %d, "
            "in_production %d -> %d",
            current.product_id,
            current.quantity_on_hand,
            updated.quantity_on_hand,
            current.quantity_reserved,
            updated.quantity_reserved,
            current.quantity_in_production,
            updated.quantity_in_production,
        )
        return updated

    # --- Internal helpers -----------------------------------------------------

    def _resolve(
        self, inventory_id: str | None, product_id: str | None
    ) -> InventorySnapshot:
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
        return found

    @staticmethod
    def _patch_fields(
        snapshot: InventorySnapshot, restocked: bool, sold: bool
    ) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "quantity_on_hand": snapshot.quantity_on_hand,
            "quantity_reserved": snapshot.quantity_reserved,
            "quantity_available": snapshot.quantity_available,
            "quantity_in_production": snapshot.quantity_in_production,
            "unit_cost": snapshot.unit_cost,
            "total_value": snapshot.total_value,
            "low_stock_alert": snapshot.low_stock_alert,
            "out_of_stock": snapshot.out_of_stock,
            "overstocked": snapshot.overstocked,
        }
        if restocked:
            fields["last_restocked"] = snapshot.last_restocked
        if sold:
            fields["last_sold"] = snapshot.last_sold
        return fields
