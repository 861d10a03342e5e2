"""In-memory record collections used by the mock store server and tests."""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from uuid import uuid4

COLLECTIONS = ("tasks", "users")


def _as_query_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


@dataclass(slots=True)
class InMemoryStore:
    """Deterministic json-server style persistence keyed by collection and record id."""

    collections: dict[str, dict[str, dict[str, Any]]] = field(
        default_factory=lambda: {name: {} for name in COLLECTIONS}
    )
    write_count: int = 0

    @classmethod
    def from_seed_file(cls, path: Path) -> InMemoryStore:
        """Load a ``db.json`` shaped file: one top-level array per collection."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        store = cls()
        for name in COLLECTIONS:
            for record in raw.get(name, []):
                record = dict(record)
                record_id = str(record.get("id") or uuid4())
                record["id"] = record_id
                store.collections[name][record_id] = record
        return store

    def has_collection(self, collection: str) -> bool:
        return collection in self.collections

    def list_records(self, collection: str, filters: Mapping[str, str] | None = None) -> list[dict[str, Any]]:
        records = self.collections[collection].values()
        if filters:
            records = [
                record
                for record in records
                if all(_as_query_text(record.get(key)) == expected for key, expected in filters.items())
            ]
        return [copy.deepcopy(record) for record in records]

    def get_record(self, collection: str, record_id: str) -> dict[str, Any] | None:
        record = self.collections[collection].get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def create_record(self, collection: str, body: Mapping[str, Any]) -> dict[str, Any]:
        record = copy.deepcopy(dict(body))
        record_id = str(record.get("id") or uuid4())
        record["id"] = record_id
        self.collections[collection][record_id] = record
        self.write_count += 1
        return copy.deepcopy(record)

    def update_record(self, collection: str, record_id: str, patch: Mapping[str, Any]) -> dict[str, Any] | None:
        record = self.collections[collection].get(record_id)
        if record is None:
            return None
        record.update({key: copy.deepcopy(value) for key, value in patch.items() if key != "id"})
        self.write_count += 1
        return copy.deepcopy(record)

    def delete_record(self, collection: str, record_id: str) -> bool:
        if self.collections[collection].pop(record_id, None) is None:
            return False
        self.write_count += 1
        return True
