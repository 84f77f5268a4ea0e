"""JSON-file-backed implementation of TransactionRepository.

The file is an append-only array in creation order, so the latest
transaction is always the last element.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockledger.domain.model.transaction import InventoryTransaction, TransactionType
from stockledger.domain.model.value_objects import to_int
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- TransactionRepository interface --------------------------------------

    def create(self, transaction: InventoryTransaction) -> None:
        records = self._file.load()
        records.append(self._to_raw(transaction))
        self._file.persist(records)

    def latest_transaction_number(self) -> str | None:
        for raw in reversed(self._file.load()):
            if raw.get("transaction_number"):
                return raw["transaction_number"]
        return None

    def sum_quantities(
        self,
        product_id: str,
        reference_doc_id: str | None = None,
        type: TransactionType | None = None,
    ) -> int:
        return sum(
            to_int(raw.get("quantity"))
            for raw in self._file.load()
            if self._matches(raw, product_id, reference_doc_id, type)
        )

    def list_for_product(
        self,
        product_id: str,
        reference_doc_id: str | None = None,
    ) -> list[InventoryTransaction]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if self._matches(raw, product_id, reference_doc_id, None)
        ]

    # --- Filtering ------------------------------------------------------------

    @staticmethod
    def _matches(
        raw: dict,
        product_id: str,
        reference_doc_id: str | None,
        type: TransactionType | None,
    ) -> bool:
        if raw.get("product_id") != product_id:
            return False
        if reference_doc_id and raw.get("reference_doc_id") != reference_doc_id:
            return False
        if type is not None and raw.get("type") != type.value:
            return False
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(transaction: InventoryTransaction) -> dict:
        total = transaction.total_value
        return {
            "id": transaction.id,
            "transaction_number": transaction.transaction_number,
            "product_id": transaction.product_id,
            "type": transaction.type.value,
            "quantity": transaction.quantity,
            "quantity_before": transaction.quantity_before,
            "quantity_after": transaction.quantity_after,
            "unit_cost": str(transaction.unit_cost) if transaction.unit_cost is not None else None,
            "total_value": str(total) if total is not None else None,
            "reference_doc_id": transaction.reference_doc_id,
            "reference": transaction.reference,
            "notes": transaction.notes,
            "created_by": transaction.created_by,
            "transaction_date": transaction.transaction_date.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryTransaction:
        unit_cost = raw.get("unit_cost")
        return InventoryTransaction(
            id=raw["id"],
            transaction_number=raw["transaction_number"],
            product_id=raw["product_id"],
            type=TransactionType(raw["type"]),
            quantity=to_int(raw.get("quantity")),
            quantity_before=raw.get("quantity_before"),
            quantity_after=raw.get("quantity_after"),
            unit_cost=Decimal(unit_cost) if unit_cost is not None else None,
            reference_doc_id=raw.get("reference_doc_id"),
            reference=raw.get("reference"),
            notes=raw.get("notes"),
            created_by=raw.get("created_by"),
            transaction_date=datetime.fromisoformat(raw["transaction_date"]),
        )
