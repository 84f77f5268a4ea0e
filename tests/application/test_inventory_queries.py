"""Tests for the inventory and transaction query handlers."""

from stockledger.application.show_inventory import ShowInventoryHandler
from stockledger.application.show_transactions import ShowTransactionsHandler
from stockledger.domain.model.transaction import TransactionType
from stockledger.domain.service.transaction_recorder import TransactionRecorder
from tests.fakes import FakeInventoryRepository, FakeTransactionRepository, make_snapshot


class TestShowInventory:

    def _repo(self):
        return FakeInventoryRepository(
            [
                make_snapshot("C", on_hand=40, reorder_point=10, unit_cost="2.50"),
                make_snapshot("A", on_hand=0, reorder_point=10, title="Empty"),
                make_snapshot("B", on_hand=5, reorder_point=10),
            ]
        )

    def test_sorted_by_product(self):
        lines = ShowInventoryHandler(self._repo()).handle()
        assert [line.product_id for line in lines] == ["A", "B", "C"]

    def test_flags(self):
        lines = {line.product_id: line for line in ShowInventoryHandler(self._repo()).handle()}
        assert lines["A"].flags == ["OUT"]
        assert lines["B"].flags == ["LOW"]
        assert lines["C"].flags == ["OVER"]

    def test_money_formatting(self):
        lines = {line.product_id: line for line in ShowInventoryHandler(self._repo()).handle()}
        assert lines["C"].unit_cost == "$2.50"
        assert lines["C"].total_value == "$100.00"
        assert lines["A"].product_name == "Empty"

    def test_low_stock_only(self):
        lines = ShowInventoryHandler(self._repo()).handle(low_stock_only=True)
        assert [line.product_id for line in lines] == ["A", "B"]


class TestShowTransactions:

    def _repo(self):
        repo = FakeTransactionRepository()
        recorder = TransactionRecorder(repo)
        recorder.record(
            "P-1", TransactionType.RESERVED, 3, reference_doc_id="o-1", created_by="amy"
        )
        recorder.record("P-1", TransactionType.SOLD, 3, reference="Order #2", reference_doc_id="o-2")
        recorder.record("P-2", TransactionType.RECEIVED, 8)
        return repo

    def test_lists_product_history(self):
        lines = ShowTransactionsHandler(self._repo()).handle("P-1")
        assert [line.transaction_number for line in lines] == ["IT-000001", "IT-000002"]
        assert lines[0].type == "reserved"
        assert lines[0].created_by == "amy"

    def test_reference_falls_back_to_document_id(self):
        lines = ShowTransactionsHandler(self._repo()).handle("P-1")
        assert [line.reference for line in lines] == ["o-1", "Order #2"]

    def test_filter_by_reference(self):
        lines = ShowTransactionsHandler(self._repo()).handle("P-1", reference_doc_id="o-2")
        assert [line.type for line in lines] == ["sold"]

    def test_unknown_product_empty(self):
        assert ShowTransactionsHandler(self._repo()).handle("P-9") == []
