"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockledger.infrastructure.config import Settings, load_settings
from stockledger.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from stockledger.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)


def settings() -> Settings:
    return load_settings()


def inventory_repository(config: Settings | None = None) -> JsonInventoryRepository:
    config = config or settings()
    return JsonInventoryRepository(config.inventory_file)


def transaction_repository(config: Settings | None = None) -> JsonTransactionRepository:
    config = config or settings()
    return JsonTransactionRepository(config.transactions_file)
