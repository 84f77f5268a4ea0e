"""Integration tests for the reserve, consume and production use cases.

Walks a work order through its lifecycle against the in-memory fakes.
"""

import pytest

from stockledger.application.consume_inventory import ConsumeInventoryHandler
from stockledger.application.record_production import (
    RecordProductionHandler,
    ScheduleProductionHandler,
)
from stockledger.application.reserve_inventory import ReserveInventoryHandler
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.transaction import TransactionType
from stockledger.domain.model.value_objects import InventoryItemSpec
from stockledger.domain.service.product_locks import ProductLocks
from tests.fakes import FakeInventoryRepository, FakeTransactionRepository, make_snapshot


@pytest.fixture
def repos():
    inventory = FakeInventoryRepository(
        [
            make_snapshot("PART-1", on_hand=40, title="Bracket"),
            make_snapshot("FG-1", title="Assembly"),
        ]
    )
    return inventory, FakeTransactionRepository()


class TestWorkOrderLifecycle:

    def test_reserve_use_and_complete(self, repos):
        inventory, transactions = repos
        locks = ProductLocks()
        reserve = ReserveInventoryHandler(inventory, transactions, locks)
        consume = ConsumeInventoryHandler(inventory, transactions, locks)
        schedule = ScheduleProductionHandler(inventory, transactions, locks)
        complete = RecordProductionHandler(inventory, transactions, locks)
        parts = [InventoryItemSpec("PART-1", 10, name="Bracket")]

        assert reserve.handle(parts, reference_doc_id="wo-1").ok
        schedule.handle("FG-1", 5)
        consume.handle(parts, "used", reference_doc_id="wo-1", mark_sold=False)
        complete.handle("FG-1", 5, reference_doc_id="wo-1")

        part = inventory.get_by_product_id("PART-1")
        assert (part.quantity_on_hand, part.quantity_reserved) == (30, 0)
        finished = inventory.get_by_product_id("FG-1")
        assert (finished.quantity_on_hand, finished.quantity_in_production) == (5, 0)
        assert [t.type for t in transactions.transactions] == [
            TransactionType.RESERVED,
            TransactionType.USED,
            TransactionType.MANUFACTURED,
        ]
        assert [t.transaction_number for t in transactions.transactions] == [
            "IT-000001",
            "IT-000002",
            "IT-000003",
        ]


class TestHandlerDefaults:

    def test_reference_label_defaults_to_document(self, repos):
        inventory, transactions = repos
        ReserveInventoryHandler(inventory, transactions).handle(
            [InventoryItemSpec("PART-1", 1)], reference_doc_id="order-7"
        )
        assert transactions.transactions[0].reference == "order-7"

    def test_explicit_label_kept(self, repos):
        inventory, transactions = repos
        ConsumeInventoryHandler(inventory, transactions).handle(
            [InventoryItemSpec("PART-1", 1)],
            "sold",
            reference_doc_id="order-7",
            reference_label="Order #7",
        )
        assert transactions.transactions[0].reference == "Order #7"

    def test_custom_prefix(self, repos):
        inventory, transactions = repos
        RecordProductionHandler(
            inventory, transactions, transaction_prefix="MO-"
        ).handle("FG-1", 2)
        assert transactions.transactions[0].transaction_number == "MO-000001"

    @pytest.mark.parametrize("kind", ["reserved", "bogus"])
    def test_consume_rejects_other_types(self, repos, kind):
        inventory, transactions = repos
        with pytest.raises(ValidationError, match="'sold' or 'used'"):
            ConsumeInventoryHandler(inventory, transactions).handle(
                [InventoryItemSpec("PART-1", 1)], kind
            )
