"""Process-local session storage."""

from tasktracker.adapters.session_storage.base import SessionStorage
from tasktracker.schemas.user import StoredSession


class MemorySessionStorage(SessionStorage):
    def __init__(self, initial: StoredSession | None = None) -> None:
        self.value = initial

    def load(self) -> StoredSession | None:
        return self.value

    def save(self, session: StoredSession) -> None:
        self.value = session

    def clear(self) -> None:
        self.value = None


__all__ = ["MemorySessionStorage"]
