"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from stockledger.domain.exceptions import EntityNotFoundError
from stockledger.domain.model.inventory import InventorySnapshot, InventorySource
from stockledger.domain.model.value_objects import to_decimal, to_int
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- InventoryRepository interface ----------------------------------------

    def get_by_product_id(self, product_id: str) -> InventorySnapshot | None:
        for raw in self._file.load():
            if raw.get("product_id") == product_id:
                return self._to_domain(raw)
        return None

    def get_by_id(self, inventory_id: str) -> InventorySnapshot | None:
        for raw in self._file.load():
            if raw.get("id") == inventory_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[InventorySnapshot]:
        return [self._to_domain(raw) for raw in self._file.load() if raw.get("id")]

    def save(self, snapshot: InventorySnapshot) -> None:
        records = self._file.load()
        replaced = False
        for i, raw in enumerate(records):
            if raw.get("id") == snapshot.id:
                records[i] = self._to_raw(snapshot)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(snapshot))
        self._file.persist(records)

    def patch(self, inventory_id: str, fields: dict[str, Any]) -> None:
        records = self._file.load()
        for i, raw in enumerate(records):
            if raw.get("id") == inventory_id:
                records[i] = self._to_raw(replace(self._to_domain(raw), **fields))
                self._file.persist(records)
                return
        raise EntityNotFoundError(f"Inventory record '{inventory_id}' not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(snapshot: InventorySnapshot) -> dict:
        return {
            "id": snapshot.id,
            "product_id": snapshot.product_id,
            "product_title": snapshot.product_title,
            "product_sku": snapshot.product_sku,
            "quantity_on_hand": snapshot.quantity_on_hand,
            "quantity_reserved": snapshot.quantity_reserved,
            "quantity_available": snapshot.quantity_available,
            "quantity_in_production": snapshot.quantity_in_production,
            "reorder_point": snapshot.reorder_point,
            "reorder_quantity": snapshot.reorder_quantity,
            "unit_cost": str(snapshot.unit_cost),
            "total_value": str(snapshot.total_value),
            "low_stock_alert": snapshot.low_stock_alert,
            "out_of_stock": snapshot.out_of_stock,
            "overstocked": snapshot.overstocked,
            "source": snapshot.source.value if snapshot.source else None,
            "last_restocked": _iso(snapshot.last_restocked),
            "last_sold": _iso(snapshot.last_sold),
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventorySnapshot:
        """Rebuild a snapshot, tolerating hand-edited or partial records."""
        on_hand = to_int(raw.get("quantity_on_hand"))
        reserved = max(0, to_int(raw.get("quantity_reserved")))
        return InventorySnapshot(
            id=raw["id"],
            product_id=raw.get("product_id") or "",
            product_title=raw.get("product_title") or None,
            product_sku=raw.get("product_sku") or None,
            quantity_on_hand=on_hand,
            quantity_reserved=reserved,
            quantity_available=to_int(raw.get("quantity_available"), on_hand - reserved),
            quantity_in_production=max(0, to_int(raw.get("quantity_in_production"))),
            reorder_point=max(0, to_int(raw.get("reorder_point"))),
            reorder_quantity=max(0, to_int(raw.get("reorder_quantity"))),
            unit_cost=to_decimal(raw.get("unit_cost")),
            total_value=to_decimal(raw.get("total_value")),
            low_stock_alert=bool(raw.get("low_stock_alert")),
            out_of_stock=bool(raw.get("out_of_stock")),
            overstocked=bool(raw.get("overstocked")),
            source=_source(raw.get("source")),
            last_restocked=_parse_dt(raw.get("last_restocked")),
            last_sold=_parse_dt(raw.get("last_sold")),
        )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_dt(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _source(value: str | None) -> InventorySource | None:
    try:
        return InventorySource(value) if value else None
    except ValueError:
        return None
