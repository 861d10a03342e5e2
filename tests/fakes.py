"""Shared fakes and seed data for the task tracker tests."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from tasktracker.adapters.store import InMemoryRecordStore, Record
from tasktracker.errors import DataAccessError
from tasktracker.repositories.memory import InMemoryStore

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)

SEED_USERS: list[dict[str, Any]] = [
    {"id": "u-admin", "name": "Alex", "email": "alex@example.com", "password": "admin-secret", "role": "admin"},
    {"id": "u-sam", "name": "Sam", "email": "sam@example.com", "password": "sam-secret", "role": "user"},
    {"id": "u-vic", "name": "Vic", "email": "vic@example.com", "password": "vic-secret", "role": "viewer"},
]


def fixed_clock() -> datetime:
    return FIXED_NOW


def seeded_memory() -> InMemoryStore:
    store = InMemoryStore()
    for user in SEED_USERS:
        store.create_record("users", user)
    store.write_count = 0
    return store


class CapturingStore(InMemoryRecordStore):
    """In-memory record store that records every call and can be told to fail."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        super().__init__(store or seeded_memory())
        self.calls: list[tuple[str, str]] = []
        self.fail_on: set[str] = set()

    def _record(self, method: str, collection: str) -> None:
        self.calls.append((method, collection))
        if method in self.fail_on:
            raise DataAccessError("Injected store failure", details={"method": method})

    async def list(self, collection: str, **filters: str) -> list[Record]:
        self._record("list", collection)
        return await super().list(collection, **filters)

    async def get(self, collection: str, record_id: str) -> Record:
        self._record("get", collection)
        return await super().get(collection, record_id)

    async def create(self, collection: str, body: Mapping[str, Any]) -> Record:
        self._record("create", collection)
        return await super().create(collection, body)

    async def update(self, collection: str, record_id: str, patch: Mapping[str, Any]) -> Record:
        self._record("update", collection)
        return await super().update(collection, record_id, patch)

    async def delete(self, collection: str, record_id: str) -> bool:
        self._record("delete", collection)
        return await super().delete(collection, record_id)
