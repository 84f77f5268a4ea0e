"""Domain service: Transaction Recorder.

Writes entries to the append-only log and answers the "how much has
already been applied" queries the planners use for idempotency.  No
deduplication happens here.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from stockledger.domain.model.transaction import InventoryTransaction, TransactionType
from stockledger.domain.repository.transaction_repository import TransactionRepository
from stockledger.domain.service.reference_numbers import next_reference_code
from stockledger.logging_config import get_logger

logger = get_logger("domain.transactions")

DEFAULT_PREFIX = "IT-"

# Numbers come from the latest entry across all products, so allocation
# and append must not interleave with another recorder.
_NUMBERING_LOCK = threading.Lock()


class TransactionRecorder:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._prefix = prefix

    def record(
        self,
        product_id: str,
        type: TransactionType,
        quantity: int,
        *,
        unit_cost: Decimal | None = None,
        quantity_before: int | None = None,
        quantity_after: int | None = None,
        reference: str | None = None,
        reference_doc_id: str | None = None,
        notes: str | None = None,
        created_by: str | None = None,
        transaction_date: datetime | None = None,
    ) -> InventoryTransaction:
        with _NUMBERING_LOCK:
            number = next_reference_code(
                self._prefix, self._transaction_repo.latest_transaction_number()
            )
            transaction = InventoryTransaction(
                id=str(uuid.uuid4()),
                transaction_number=number,
                product_id=product_id,
                type=type,
                quantity=quantity,
                quantity_before=quantity_before,
                quantity_after=quantity_after,
                unit_cost=unit_cost,
                reference_doc_id=reference_doc_id or None,
                reference=reference,
                notes=notes,
                created_by=created_by,
                transaction_date=transaction_date or datetime.now(timezone.utc),
            )
            self._transaction_repo.create(transaction)
        logger.info(
            "Recorded %s %s of %d for product %s",
            number,
            type.value,
            quantity,
            product_id,
            extra={"reference_doc_id": transaction.reference_doc_id},
        )
        return transaction

    def sum_quantities(
        self,
        product_id: str,
        reference_doc_id: str | None = None,
        type: TransactionType | None = None,
    ) -> int:
        return self._transaction_repo.sum_quantities(
            product_id, reference_doc_id=reference_doc_id or None, type=type
        )
