"""Abstract repository for the append-only transaction log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.transaction import InventoryTransaction, TransactionType


class TransactionRepository(ABC):

    @abstractmethod
    def create(self, transaction: InventoryTransaction) -> None:
        """Append a transaction.  Existing entries are never modified."""

    @abstractmethod
    def latest_transaction_number(self) -> str | None:
        """Return the number of the most recently created transaction, or None."""

    @abstractmethod
    def sum_quantities(
        self,
        product_id: str,
        reference_doc_id: str | None = None,
        type: TransactionType | None = None,
    ) -> int:
        """Sum ``quantity`` over matching transactions (0 when none match).

        A None filter matches every value.
        """

    @abstractmethod
    def list_for_product(
        self,
        product_id: str,
        reference_doc_id: str | None = None,
    ) -> list[InventoryTransaction]:
        """Return a product's transactions in creation order."""
