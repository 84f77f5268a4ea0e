"""Unit tests for the InventoryReservationService domain service."""

from stockledger.domain.model.results import INVENTORY_NOT_INITIALIZED
from stockledger.domain.model.transaction import TransactionType
from stockledger.domain.model.value_objects import InventoryItemSpec
from stockledger.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from tests.fakes import FakeInventoryRepository, FakeTransactionRepository, make_snapshot


def _setup(*snapshots):
    inventory = FakeInventoryRepository(list(snapshots))
    transactions = FakeTransactionRepository()
    svc = InventoryReservationService(inventory, transactions)
    return inventory, transactions, svc


class TestReserve:

    def test_reserves_requested_quantity(self):
        inventory, transactions, svc = _setup(make_snapshot("P-1", on_hand=100))

        result = svc.reserve([InventoryItemSpec("P-1", 10)], reference_doc_id="order-1")

        assert [(r.product_id, r.quantity) for r in result.reserved] == [("P-1", 10)]
        snap = inventory.get_by_product_id("P-1")
        assert snap.quantity_reserved == 10
        assert snap.quantity_available == 90
        assert snap.quantity_on_hand == 100

    def test_logs_one_reserved_transaction(self):
        _, transactions, svc = _setup(make_snapshot("P-1", on_hand=100, unit_cost="2.00"))

        svc.reserve(
            [InventoryItemSpec("P-1", 4, name="Widget")],
            reference_doc_id="order-1",
            reference_label="Order #1",
            created_by="alice",
        )

        [tx] = transactions.transactions
        assert tx.type is TransactionType.RESERVED
        assert tx.quantity == 4
        assert tx.reference_doc_id == "order-1"
        assert tx.reference == "Order #1"
        assert tx.notes == "Reserved for Widget"
        assert tx.created_by == "alice"
        assert tx.quantity_before == tx.quantity_after == 100

    def test_invalid_quantity_defaults_to_one(self):
        inventory, _, svc = _setup(make_snapshot("P-1", on_hand=10))

        svc.reserve([InventoryItemSpec("P-1", 0)], reference_doc_id="order-1")

        assert inventory.get_by_product_id("P-1").quantity_reserved == 1


class TestIdempotency:

    def test_second_identical_call_is_noop(self):
        inventory, transactions, svc = _setup(make_snapshot("P-1", on_hand=100))
        items = [InventoryItemSpec("P-1", 5)]

        svc.reserve(items, reference_doc_id="order-1")
        second = svc.reserve(items, reference_doc_id="order-1")

        assert second.reserved == []
        assert second.insufficient == []
        assert len(transactions.of_type(TransactionType.RESERVED)) == 1
        assert inventory.get_by_product_id("P-1").quantity_reserved == 5

    def test_partial_top_up(self):
        inventory, transactions, svc = _setup(make_snapshot("P-1", on_hand=100))

        svc.reserve([InventoryItemSpec("P-1", 3)], reference_doc_id="order-1")
        result = svc.reserve([InventoryItemSpec("P-1", 5)], reference_doc_id="order-1")

        assert [r.quantity for r in result.reserved] == [2]
        assert transactions.sum_quantities("P-1", "order-1", TransactionType.RESERVED) == 5
        assert inventory.get_by_product_id("P-1").quantity_reserved == 5

    def test_other_reference_reserves_separately(self):
        inventory, _, svc = _setup(make_snapshot("P-1", on_hand=100))

        svc.reserve([InventoryItemSpec("P-1", 5)], reference_doc_id="order-1")
        svc.reserve([InventoryItemSpec("P-1", 5)], reference_doc_id="order-2")

        assert inventory.get_by_product_id("P-1").quantity_reserved == 10

    def test_repeated_product_in_one_batch_composes(self):
        inventory, transactions, svc = _setup(make_snapshot("P-1", on_hand=100))

        result = svc.reserve(
            [InventoryItemSpec("P-1", 3), InventoryItemSpec("P-1", 5)],
            reference_doc_id="order-1",
        )

        # The second line only tops up to 5 in total
        assert [r.quantity for r in result.reserved] == [3, 2]
        assert inventory.get_by_product_id("P-1").quantity_reserved == 5
        assert len(transactions.transactions) == 2


class TestInsufficientAndMissing:

    def test_insufficient_reported_not_reserved(self):
        inventory, transactions, svc = _setup(make_snapshot("P-1", on_hand=5, reserved=2))

        result = svc.reserve([InventoryItemSpec("P-1", 4)], reference_doc_id="order-1")

        [line] = result.insufficient
        assert (line.required, line.available) == (4, 3)
        assert inventory.get_by_product_id("P-1").quantity_reserved == 2
        assert transactions.transactions == []

    def test_exactly_available_is_reserved(self):
        inventory, _, svc = _setup(make_snapshot("P-1", on_hand=5, reserved=2))

        result = svc.reserve([InventoryItemSpec("P-1", 3)], reference_doc_id="order-1")

        assert result.insufficient == []
        assert inventory.get_by_product_id("P-1").quantity_available == 0

    def test_missing_inventory_does_not_stop_batch(self):
        inventory, _, svc = _setup(make_snapshot("P-2", on_hand=10))

        result = svc.reserve(
            [InventoryItemSpec("P-1", 1), InventoryItemSpec("P-2", 4)],
            reference_doc_id="order-1",
        )

        assert [(m.product_id, m.reason) for m in result.missing] == [
            ("P-1", INVENTORY_NOT_INITIALIZED)
        ]
        assert inventory.get_by_product_id("P-2").quantity_reserved == 4

    def test_no_rollback_when_later_item_fails(self):
        inventory, _, svc = _setup(
            make_snapshot("P-1", on_hand=100), make_snapshot("P-2", on_hand=3)
        )

        result = svc.reserve(
            [InventoryItemSpec("P-1", 10), InventoryItemSpec("P-2", 5)],
            reference_doc_id="order-1",
        )

        assert len(result.insufficient) == 1
        assert inventory.get_by_product_id("P-1").quantity_reserved == 10
        assert result.ok is False

    def test_item_without_product_reported_missing(self):
        _, _, svc = _setup()
        result = svc.reserve([InventoryItemSpec(None, 1)])
        assert result.missing[0].product_id is None
