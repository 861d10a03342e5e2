"""Local task list kept in step with the record store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tasktracker.errors import RecordNotFoundError
from tasktracker.schemas.task import Task, TaskDraft
from tasktracker.services.session import Session
from tasktracker.services.tasks import TaskService


class TaskBoard:
    """The signed-in user's view of visible tasks.

    ``tasks`` only changes after the matching store call succeeded.
    """

    def __init__(self, service: TaskService, session: Session) -> None:
        self._service = service
        self._session = session
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    async def refresh(self) -> list[Task]:
        user = self._session.require_user()
        self._tasks = await self._service.list_visible_tasks(user.id)
        return self.tasks

    async def add(self, draft: TaskDraft | Mapping[str, Any]) -> Task:
        user = self._session.require_user()
        task = await self._service.create_task(
            user_id=user.id,
            role=user.role,
            draft=draft,
            created_by=user.name,
        )
        self._tasks = [*self._tasks, task]
        return task

    async def toggle(self, task_id: str) -> Task:
        user = self._session.require_user()
        updated = await self._service.toggle_task(task=self._find(task_id), role=user.role)
        self._tasks = [updated if task.id == task_id else task for task in self._tasks]
        return updated

    async def remove(self, task_id: str) -> None:
        user = self._session.require_user()
        await self._service.delete_task(task_id=task_id, role=user.role)
        self._tasks = [task for task in self._tasks if task.id != task_id]

    def _find(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise RecordNotFoundError("Task is not on the board", details={"task_id": task_id})


__all__ = ["TaskBoard"]
