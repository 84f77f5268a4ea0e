"""Abstract repository for the InventorySnapshot aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from stockledger.domain.model.inventory import InventorySnapshot


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> InventorySnapshot | None:
        """Return the snapshot for a product, or None."""

    @abstractmethod
    def get_by_id(self, inventory_id: str) -> InventorySnapshot | None:
        """Return a snapshot by its own ID, or None."""

    @abstractmethod
    def list_all(self) -> list[InventorySnapshot]:
        """Return every snapshot."""

    @abstractmethod
    def save(self, snapshot: InventorySnapshot) -> None:
        """Create or replace a whole snapshot (provisioning only)."""

    @abstractmethod
    def patch(self, inventory_id: str, fields: dict[str, Any]) -> None:
        """Set *fields* on one snapshot in a single write.

        Keys are ``InventorySnapshot`` attribute names.  Raises
        EntityNotFoundError if no snapshot has that ID.
        """
