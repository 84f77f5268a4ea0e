"""Runtime settings read from the environment (and a local ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    transaction_prefix: str = "IT-"
    log_level: str = "WARNING"
    log_json: bool = False
    actor: str = "system"

    @property
    def inventory_file(self) -> Path:
        return self.data_dir / "inventory.json"

    @property
    def transactions_file(self) -> Path:
        return self.data_dir / "transactions.json"


def load_settings() -> Settings:
    """Build settings from ``STOCKLEDGER_*`` environment variables."""
    load_dotenv()
    return Settings(
        data_dir=Path(os.getenv("STOCKLEDGER_DATA_DIR", "data")),
        transaction_prefix=os.getenv("STOCKLEDGER_TRANSACTION_PREFIX", "IT-"),
        log_level=os.getenv("STOCKLEDGER_LOG_LEVEL", "WARNING"),
        log_json=_env_bool("STOCKLEDGER_LOG_JSON"),
        actor=os.getenv("STOCKLEDGER_ACTOR", "system"),
    )
