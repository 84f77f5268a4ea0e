"""Unit tests for the InventoryConsumptionService domain service."""

import pytest

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.transaction import TransactionType
from stockledger.domain.model.value_objects import InventoryItemSpec
from stockledger.domain.service.inventory_consumption_service import (
    InventoryConsumptionService,
)
from stockledger.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from tests.fakes import FakeInventoryRepository, FakeTransactionRepository, make_snapshot


def _setup(*snapshots):
    inventory = FakeInventoryRepository(list(snapshots))
    transactions = FakeTransactionRepository()
    reserve = InventoryReservationService(inventory, transactions)
    consume = InventoryConsumptionService(inventory, transactions)
    return inventory, transactions, reserve, consume


class TestConsume:

    def test_deducts_on_hand_and_logs(self):
        inventory, transactions, _, consume = _setup(make_snapshot("P-1", on_hand=10))

        result = consume.consume(
            [InventoryItemSpec("P-1", 3, name="Widget")],
            TransactionType.SOLD,
            reference_doc_id="order-1",
        )

        assert [c.quantity for c in result.consumed] == [3]
        assert inventory.get_by_product_id("P-1").quantity_on_hand == 7
        [tx] = transactions.transactions
        assert tx.type is TransactionType.SOLD
        assert (tx.quantity_before, tx.quantity_after) == (10, 7)
        assert tx.notes == "Sold Widget"

    def test_used_sets_notes(self):
        _, transactions, _, consume = _setup(make_snapshot("P-1", on_hand=10))
        consume.consume(
            [InventoryItemSpec("P-1", 1, name="Bolt")],
            TransactionType.USED,
            reference_doc_id="wo-1",
        )
        assert transactions.transactions[0].notes == "Used Bolt"

    def test_marks_last_sold(self):
        inventory, _, _, consume = _setup(make_snapshot("P-1", on_hand=10))
        consume.consume([InventoryItemSpec("P-1", 1)], TransactionType.SOLD, "order-1")
        assert inventory.get_by_product_id("P-1").last_sold is not None

    def test_mark_sold_can_be_disabled(self):
        inventory, _, _, consume = _setup(make_snapshot("P-1", on_hand=10))
        consume.consume(
            [InventoryItemSpec("P-1", 1)], TransactionType.USED, "wo-1", mark_sold=False
        )
        assert inventory.get_by_product_id("P-1").last_sold is None

    def test_rejects_non_consumption_type(self):
        _, _, _, consume = _setup(make_snapshot("P-1", on_hand=10))
        with pytest.raises(ValidationError, match="'sold' or 'used'"):
            consume.consume([InventoryItemSpec("P-1", 1)], TransactionType.RESERVED)


class TestReleasesReservation:

    def test_consuming_releases_matching_reservation(self):
        inventory, _, reserve, consume = _setup(make_snapshot("P-1", on_hand=20))
        reserve.reserve([InventoryItemSpec("P-1", 5)], reference_doc_id="wo-1")

        consume.consume([InventoryItemSpec("P-1", 5)], TransactionType.USED, "wo-1")

        snap = inventory.get_by_product_id("P-1")
        assert snap.quantity_reserved == 0
        assert snap.quantity_on_hand == 15
        assert snap.quantity_available == 15

    def test_other_reference_reservation_untouched(self):
        inventory, _, reserve, consume = _setup(make_snapshot("P-1", on_hand=20))
        reserve.reserve([InventoryItemSpec("P-1", 5)], reference_doc_id="wo-1")

        consume.consume([InventoryItemSpec("P-1", 3)], TransactionType.USED, "wo-2")

        snap = inventory.get_by_product_id("P-1")
        assert snap.quantity_reserved == 5
        assert snap.quantity_on_hand == 17

    def test_release_capped_at_reserved(self):
        inventory, _, reserve, consume = _setup(make_snapshot("P-1", on_hand=20))
        reserve.reserve([InventoryItemSpec("P-1", 2)], reference_doc_id="order-1")

        consume.consume([InventoryItemSpec("P-1", 6)], TransactionType.SOLD, "order-1")

        snap = inventory.get_by_product_id("P-1")
        assert snap.quantity_reserved == 0
        assert snap.quantity_on_hand == 14

    def test_repeated_product_does_not_release_twice(self):
        inventory, _, reserve, consume = _setup(
            make_snapshot("P-1", on_hand=20, reserved=3)
        )
        reserve.reserve([InventoryItemSpec("P-1", 4)], reference_doc_id="order-1")

        consume.consume(
            [InventoryItemSpec("P-1", 4), InventoryItemSpec("P-1", 6)],
            TransactionType.SOLD,
            "order-1",
        )

        # 4 reserved for order-1 released; the unrelated 3 stay reserved
        snap = inventory.get_by_product_id("P-1")
        assert snap.quantity_reserved == 3
        assert snap.quantity_on_hand == 14

    def test_without_reference_releases_any_reservation(self):
        # No reference document means sums run across every reference
        inventory, transactions, reserve, consume = _setup(make_snapshot("P-1", on_hand=20))
        reserve.reserve([InventoryItemSpec("P-1", 5)], reference_doc_id="order-1")

        consume.consume([InventoryItemSpec("P-1", 3)], TransactionType.SOLD)

        snap = inventory.get_by_product_id("P-1")
        assert snap.quantity_reserved == 2
        assert snap.quantity_on_hand == 17
        assert transactions.of_type(TransactionType.SOLD)[0].reference_doc_id is None

    def test_without_reference_counts_earlier_consumption(self):
        inventory, _, _, consume = _setup(make_snapshot("P-1", on_hand=20))
        consume.consume([InventoryItemSpec("P-1", 4)], TransactionType.SOLD, "order-1")

        result = consume.consume([InventoryItemSpec("P-1", 4)], TransactionType.SOLD)

        assert result.consumed == []
        assert inventory.get_by_product_id("P-1").quantity_on_hand == 16


class TestIdempotency:

    def test_second_identical_call_is_noop(self):
        inventory, transactions, _, consume = _setup(make_snapshot("P-1", on_hand=10))
        items = [InventoryItemSpec("P-1", 4)]

        consume.consume(items, TransactionType.SOLD, "order-1")
        second = consume.consume(items, TransactionType.SOLD, "order-1")

        assert second.consumed == []
        assert inventory.get_by_product_id("P-1").quantity_on_hand == 6
        assert len(transactions.transactions) == 1

    def test_sold_and_used_tracked_separately(self):
        inventory, _, _, consume = _setup(make_snapshot("P-1", on_hand=10))

        consume.consume([InventoryItemSpec("P-1", 2)], TransactionType.SOLD, "doc-1")
        consume.consume([InventoryItemSpec("P-1", 2)], TransactionType.USED, "doc-1")

        assert inventory.get_by_product_id("P-1").quantity_on_hand == 6


class TestShortagesAndMissing:

    def test_shortage_reported_without_blocking(self):
        inventory, transactions, _, consume = _setup(make_snapshot("P-1", on_hand=4))

        result = consume.consume(
            [InventoryItemSpec("P-1", 10)], TransactionType.SOLD, "order-1"
        )

        [shortage] = result.shortages
        assert (shortage.required, shortage.on_hand) == (10, 4)
        [tx] = transactions.transactions
        assert tx.quantity == 10
        snap = inventory.get_by_product_id("P-1")
        assert snap.quantity_on_hand == -6
        assert snap.out_of_stock is True

    def test_missing_inventory_never_raises(self):
        inventory, _, _, consume = _setup(make_snapshot("P-2", on_hand=5))

        result = consume.consume(
            [InventoryItemSpec("P-1", 1), InventoryItemSpec("P-2", 2)],
            TransactionType.SOLD,
            "order-1",
        )

        assert [m.product_id for m in result.missing] == ["P-1"]
        assert inventory.get_by_product_id("P-2").quantity_on_hand == 3
