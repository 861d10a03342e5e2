"""Wiring of store, session and services into one explicitly passed object."""

from __future__ import annotations

from dataclasses import dataclass

from tasktracker.adapters.session_storage import FileSessionStorage, SessionStorage
from tasktracker.adapters.store import HttpRecordStore, RecordStore
from tasktracker.core.config import Settings, get_settings
from tasktracker.schemas.user import User
from tasktracker.services.session import Session
from tasktracker.services.task_board import TaskBoard
from tasktracker.services.tasks import TaskService
from tasktracker.services.users import UserService


@dataclass(slots=True)
class TrackerContext:
    store: RecordStore
    session: Session
    tasks: TaskService
    users: UserService
    board: TaskBoard

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        *,
        store: RecordStore | None = None,
        storage: SessionStorage | None = None,
    ) -> TrackerContext:
        settings = settings or get_settings()
        store = store or HttpRecordStore(settings.record_store_url, timeout=settings.request_timeout)
        storage = storage or FileSessionStorage(settings.session_path)

        session = Session(store, storage)
        tasks = TaskService(store)
        return cls(
            store=store,
            session=session,
            tasks=tasks,
            users=UserService(store),
            board=TaskBoard(tasks, session),
        )

    async def start(self) -> User | None:
        """Restore the previous session, if the stored user still exists."""
        return await self.session.restore()

    async def aclose(self) -> None:
        await self.store.aclose()

    async def __aenter__(self) -> TrackerContext:
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = ["TrackerContext"]
