"""Access-controlled task service."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from tasktracker.adapters.store import Record, RecordStore
from tasktracker.core.logging_safety import safe_log_identifier
from tasktracker.domain.permissions import Action, ensure_permission
from tasktracker.errors import DataAccessError, PermissionDeniedError, ValidationError
from tasktracker.schemas.task import Priority, Task, TaskDraft, TaskPatch, Visibility
from tasktracker.schemas.user import Role

logger = logging.getLogger(__name__)

TASKS = "tasks"
TITLE_MAX_LENGTH = 50


def _utc_now() -> datetime:
    return datetime.now(UTC)


class _FieldErrors:
    """Collects per-field messages so one error reports every bad field."""

    def __init__(self) -> None:
        self.items: list[dict[str, str]] = []

    def add(self, field: str, message: str) -> None:
        self.items.append({"field": field, "message": message})

    def raise_if_any(self) -> None:
        if self.items:
            raise ValidationError("Invalid task fields", details={"errors": self.items})


def _check_title(value: str, errors: _FieldErrors) -> str:
    title = value.strip()
    if not title:
        errors.add("title", "Title is required")
    elif len(title) > TITLE_MAX_LENGTH:
        errors.add("title", f"Title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def _check_priority(value: Priority | str, errors: _FieldErrors) -> Priority:
    if isinstance(value, Priority):
        return value
    for priority in Priority:
        if priority.value.lower() == str(value).strip().lower():
            return priority
    errors.add("priority", "Priority must be Low, Medium or High")
    return Priority.MEDIUM


def _check_visibility(value: Visibility | str | None, errors: _FieldErrors) -> Visibility:
    if value is None or value == "":
        return Visibility.PRIVATE
    if isinstance(value, Visibility):
        return value
    try:
        return Visibility(str(value).strip().lower())
    except ValueError:
        errors.add("visibility", "Visibility must be private or shared")
        return Visibility.PRIVATE


def _check_due_date(value: date | str | None, today: date, errors: _FieldErrors) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value.strip())
        except ValueError:
            errors.add("dueDate", "Due date must be an ISO calendar date")
            return None
    if value < today:
        errors.add("dueDate", "Due date cannot be in the past")
    return value


def _check_reward(value: float | str | None, errors: _FieldErrors) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    try:
        reward = float(value)
    except ValueError:
        errors.add("reward", "Reward must be a number")
        return 0.0
    if not math.isfinite(reward) or reward < 0:
        errors.add("reward", "Reward must be a non-negative amount")
        return 0.0
    return reward


def _coerce(model: type[TaskDraft] | type[TaskPatch], value: Any) -> Any:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid task fields",
            details={
                "errors": [
                    {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                    for error in exc.errors()
                ]
            },
        ) from exc


class TaskService:
    def __init__(self, store: RecordStore, *, clock: Callable[[], datetime] = _utc_now) -> None:
        self._store = store
        self._clock = clock

    async def list_visible_tasks(self, user_id: str) -> list[Task]:
        """Return the user's own tasks plus every shared task, one entry per id."""
        own = await self._store.list(TASKS, userId=user_id)
        shared = await self._store.list(TASKS, visibility=Visibility.SHARED.value)

        merged: dict[str, Task] = {}
        for record in [*own, *shared]:
            task = self._to_task(record)
            merged[task.id] = task
        return list(merged.values())

    async def create_task(
        self,
        *,
        user_id: str,
        role: Role,
        draft: TaskDraft | Mapping[str, Any],
        created_by: str | None = None,
    ) -> Task:
        draft = _coerce(TaskDraft, draft)
        now = self._clock()

        errors = _FieldErrors()
        title = _check_title(draft.title, errors)
        priority = _check_priority(draft.priority, errors)
        visibility = _check_visibility(draft.visibility, errors)
        due_date = _check_due_date(draft.due_date, now.date(), errors)
        reward = _check_reward(draft.reward, errors)
        errors.raise_if_any()

        self._ensure(role, Action.CREATE, user_id)
        if visibility is Visibility.SHARED:
            self._ensure(role, Action.CREATE_SHARED, user_id)

        task = Task(
            id=str(uuid4()),
            title=title,
            priority=priority,
            completed=False,
            due_date=due_date,
            reward=reward,
            visibility=visibility,
            user_id=user_id,
            created_by=created_by,
            created_at=now,
        )
        created = self._to_task(await self._store.create(TASKS, task.to_wire()))
        logger.info(
            "task.created task_id=%s user_id=%s visibility=%s",
            safe_log_identifier(created.id, prefix="tid"),
            safe_log_identifier(user_id, prefix="uid"),
            created.visibility.value,
        )
        return created

    async def update_task(self, *, task_id: str, role: Role, patch: TaskPatch | Mapping[str, Any]) -> Task:
        self._ensure(role, Action.UPDATE)
        patch = _coerce(TaskPatch, patch).model_copy()
        fields = set(patch.model_fields_set)

        errors = _FieldErrors()
        if not fields:
            errors.add("patch", "No fields to update")
        if "title" in fields:
            patch.title = _check_title(patch.title or "", errors)
        if "priority" in fields:
            patch.priority = _check_priority(patch.priority or "", errors)
        if "visibility" in fields:
            patch.visibility = _check_visibility(patch.visibility, errors)
        if "due_date" in fields:
            patch.due_date = _check_due_date(patch.due_date, self._clock().date(), errors)
        if "reward" in fields:
            patch.reward = _check_reward(patch.reward, errors)
        if "completed" in fields and patch.completed is None:
            errors.add("completed", "Completed must be true or false")
        errors.raise_if_any()

        if patch.visibility is Visibility.SHARED:
            self._ensure(role, Action.CREATE_SHARED)

        updated = self._to_task(await self._store.update(TASKS, task_id, patch.to_wire(partial=True)))
        logger.info(
            "task.updated task_id=%s fields=%s",
            safe_log_identifier(task_id, prefix="tid"),
            sorted(fields),
        )
        return updated

    async def toggle_task(self, *, task: Task, role: Role) -> Task:
        return await self.update_task(task_id=task.id, role=role, patch=TaskPatch(completed=not task.completed))

    async def delete_task(self, *, task_id: str, role: Role) -> bool:
        self._ensure(role, Action.DELETE)
        await self._store.delete(TASKS, task_id)
        logger.info("task.deleted task_id=%s", safe_log_identifier(task_id, prefix="tid"))
        return True

    @staticmethod
    def _ensure(role: Role, action: Action, user_id: str | None = None) -> None:
        try:
            ensure_permission(role, action)
        except PermissionDeniedError:
            logger.warning(
                "task.rejected user_id=%s role=%s action=%s reason=permission_denied",
                safe_log_identifier(user_id, prefix="uid"),
                getattr(role, "value", role),
                action.value,
            )
            raise

    @staticmethod
    def _to_task(record: Record) -> Task:
        try:
            return Task.model_validate(record)
        except PydanticValidationError as exc:
            raise DataAccessError(
                "Record store returned a malformed task",
                details={"record_id": str(record.get("id")) if isinstance(record, Mapping) else None},
            ) from exc


__all__ = ["TITLE_MAX_LENGTH", "TaskService"]
