"""A JSON array stored in one file.

Writes go to a sibling temp file that is then renamed over the
original, so a reader never sees a half-written document.
"""

from __future__ import annotations

import json
from pathlib import Path

from stockledger.domain.exceptions import StorageError


class JsonFile:

    def __init__(self, path: Path) -> None:
        self.path = path
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StorageError(f"Malformed JSON in {self.path}: {exc}") from exc
        if not isinstance(records, list):
            raise StorageError(f"Expected a JSON array in {self.path}")
        return records

    def persist(self, records: list[dict]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot create {self.path}: {exc}") from exc
