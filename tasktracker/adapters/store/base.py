"""Record store interfaces."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

Record = dict[str, Any]


class RecordStore(ABC):
    """Create/read/update/delete access to a remote record collection.

    Every method raises ``DataAccessError`` on failure; lookups of a missing
    record raise ``RecordNotFoundError``.
    """

    @abstractmethod
    async def list(self, collection: str, **filters: str) -> list[Record]:
        """Return records whose fields equal every filter value."""

    @abstractmethod
    async def get(self, collection: str, record_id: str) -> Record:
        """Return one record by id."""

    @abstractmethod
    async def create(self, collection: str, body: Mapping[str, Any]) -> Record:
        """Persist a new record and return it as stored."""

    @abstractmethod
    async def update(self, collection: str, record_id: str, patch: Mapping[str, Any]) -> Record:
        """Merge partial fields into a record and return it."""

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> bool:
        """Remove a record."""

    async def aclose(self) -> None:
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = ["Record", "RecordStore"]
