"""In-process record store for local development and tests."""

from collections.abc import Mapping
from typing import Any

from tasktracker.adapters.store.base import Record, RecordStore
from tasktracker.errors import RecordConflictError, RecordNotFoundError
from tasktracker.repositories.memory import InMemoryStore


class InMemoryRecordStore(RecordStore):
    """Serves the record store contract straight from an ``InMemoryStore``."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()

    @property
    def write_count(self) -> int:
        return self.store.write_count

    def _collection(self, collection: str) -> str:
        if not self.store.has_collection(collection):
            raise RecordNotFoundError("Unknown collection", details={"collection": collection})
        return collection

    async def list(self, collection: str, **filters: str) -> list[Record]:
        return self.store.list_records(self._collection(collection), filters)

    async def get(self, collection: str, record_id: str) -> Record:
        record = self.store.get_record(self._collection(collection), record_id)
        if record is None:
            raise RecordNotFoundError("Record not found", details={"collection": collection})
        return record

    async def create(self, collection: str, body: Mapping[str, Any]) -> Record:
        collection = self._collection(collection)
        record_id = body.get("id")
        if record_id and self.store.get_record(collection, str(record_id)) is not None:
            raise RecordConflictError("Duplicate record id", details={"collection": collection})
        return self.store.create_record(collection, body)

    async def update(self, collection: str, record_id: str, patch: Mapping[str, Any]) -> Record:
        record = self.store.update_record(self._collection(collection), record_id, patch)
        if record is None:
            raise RecordNotFoundError("Record not found", details={"collection": collection})
        return record

    async def delete(self, collection: str, record_id: str) -> bool:
        if not self.store.delete_record(self._collection(collection), record_id):
            raise RecordNotFoundError("Record not found", details={"collection": collection})
        return True


__all__ = ["InMemoryRecordStore"]
