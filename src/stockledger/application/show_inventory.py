"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from stockledger.application.dto import InventoryLineDTO
from stockledger.domain.model.inventory import InventorySnapshot
from stockledger.domain.repository.inventory_repository import InventoryRepository


class ShowInventoryHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self, low_stock_only: bool = False) -> list[InventoryLineDTO]:
        snapshots = self._inventory_repo.list_all()
        if low_stock_only:
            snapshots = [s for s in snapshots if s.low_stock_alert]
        return [self._to_dto(s) for s in sorted(snapshots, key=lambda s: s.product_id)]

    @staticmethod
    def _to_dto(snapshot: InventorySnapshot) -> InventoryLineDTO:
        flags = []
        if snapshot.out_of_stock:
            flags.append("OUT")
        elif snapshot.low_stock_alert:
            flags.append("LOW")
        if snapshot.overstocked:
            flags.append("OVER")
        return InventoryLineDTO(
            product_id=snapshot.product_id,
            product_name=snapshot.display_name,
            on_hand=snapshot.quantity_on_hand,
            reserved=snapshot.quantity_reserved,
            available=snapshot.quantity_available,
            in_production=snapshot.quantity_in_production,
            reorder_point=snapshot.reorder_point,
            unit_cost=f"${snapshot.unit_cost:.2f}",
            total_value=f"${snapshot.total_value:.2f}",
            flags=flags,
        )
