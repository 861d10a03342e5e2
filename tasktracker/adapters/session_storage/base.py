"""Durable session storage interface."""

from abc import ABC, abstractmethod

from tasktracker.schemas.user import StoredSession


class SessionStorage(ABC):
    """Holds at most one persisted session between process runs."""

    @abstractmethod
    def load(self) -> StoredSession | None:
        """Return the stored session, or ``None`` when nothing usable is stored."""

    @abstractmethod
    def save(self, session: StoredSession) -> None:
        """Replace the stored session."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the stored session."""


__all__ = ["SessionStorage"]
