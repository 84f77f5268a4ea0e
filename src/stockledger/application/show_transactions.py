"""Application service: Show Transactions use case (query)."""

from __future__ import annotations

from stockledger.application.dto import TransactionLineDTO
from stockledger.domain.model.transaction import InventoryTransaction
from stockledger.domain.repository.transaction_repository import TransactionRepository


class ShowTransactionsHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self, product_id: str, reference_doc_id: str | None = None
    ) -> list[TransactionLineDTO]:
        transactions = self._transaction_repo.list_for_product(
            product_id, reference_doc_id=reference_doc_id
        )
        return [self._to_dto(t) for t in transactions]

    @staticmethod
    def _to_dto(transaction: InventoryTransaction) -> TransactionLineDTO:
        return TransactionLineDTO(
            transaction_number=transaction.transaction_number,
            type=transaction.type.value,
            quantity=transaction.quantity,
            quantity_before=transaction.quantity_before,
            quantity_after=transaction.quantity_after,
            reference=transaction.reference or transaction.reference_doc_id or "",
            notes=transaction.notes or "",
            created_by=transaction.created_by or "",
            transaction_date=transaction.transaction_date.strftime("%Y-%m-%d %H:%M UTC"),
        )
