"""Administrator user-management service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from tasktracker.adapters.store import Record, RecordStore
from tasktracker.core.logging_safety import safe_log_identifier
from tasktracker.domain.permissions import Action, ensure_permission
from tasktracker.errors import DataAccessError, PermissionDeniedError, ValidationError
from tasktracker.schemas.user import NewUser, Role, User, UserPatch, UserRecord

logger = logging.getLogger(__name__)

USERS = "users"
PASSWORD_MIN_LENGTH = 6


def to_user_record(record: Record) -> UserRecord:
    """Decode a stored user; unknown roles and missing fields count as malformed."""
    try:
        return UserRecord.model_validate(record)
    except PydanticValidationError as exc:
        raise DataAccessError(
            "Record store returned a malformed user",
            details={"record_id": str(record.get("id")) if isinstance(record, Mapping) else None},
        ) from exc


def _validate_user_fields(
    *, name: str | None, email: str | None, password: str | None, cleared: tuple[str, ...] = ()
) -> None:
    errors: list[dict[str, str]] = [
        {"field": field, "message": f"{field.capitalize()} cannot be empty"} for field in cleared
    ]
    if name is not None and not name.strip():
        errors.append({"field": "name", "message": "Name is required"})
    if email is not None and "@" not in email:
        errors.append({"field": "email", "message": "Please enter a valid email address"})
    if password is not None and len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            {"field": "password", "message": f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"}
        )
    if errors:
        raise ValidationError("Invalid user fields", details={"errors": errors})


def _coerce(model: type[NewUser] | type[UserPatch], value: Any) -> Any:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid user fields",
            details={
                "errors": [
                    {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                    for error in exc.errors()
                ]
            },
        ) from exc


class UserService:
    """User CRUD for administrators; every returned ``User`` is credential-free."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def list_users(self, *, role: Role) -> list[User]:
        ensure_permission(role, Action.MANAGE_USERS)
        return [to_user_record(record).to_public() for record in await self._store.list(USERS)]

    async def get_user(self, user_id: str) -> User:
        return to_user_record(await self._store.get(USERS, user_id)).to_public()

    async def create_user(self, *, role: Role, new_user: NewUser | Mapping[str, Any]) -> User:
        ensure_permission(role, Action.MANAGE_USERS)
        new_user = _coerce(NewUser, new_user)
        _validate_user_fields(name=new_user.name, email=new_user.email, password=new_user.password)

        await self._ensure_email_available(new_user.email.strip())

        body = UserRecord(
            id=str(uuid4()),
            name=new_user.name.strip(),
            email=new_user.email.strip(),
            role=new_user.role,
            password=new_user.password,
        ).model_dump(mode="json")
        created = to_user_record(await self._store.create(USERS, body)).to_public()
        logger.info(
            "user.created user_id=%s role=%s",
            safe_log_identifier(created.id, prefix="uid"),
            created.role.value,
        )
        return created

    async def update_user(self, *, role: Role, user_id: str, patch: UserPatch | Mapping[str, Any]) -> User:
        ensure_permission(role, Action.MANAGE_USERS)
        patch = _coerce(UserPatch, patch)
        body = patch.model_dump(mode="json", exclude_unset=True)
        if not body:
            raise ValidationError(
                "Invalid user fields",
                details={"errors": [{"field": "patch", "message": "No fields to update"}]},
            )
        _validate_user_fields(
            name=patch.name,
            email=patch.email,
            password=patch.password,
            cleared=tuple(field for field in UserPatch.model_fields if field in body and body[field] is None),
        )

        for field in ("name", "email"):
            if field in body:
                body[field] = body[field].strip()
        if "email" in body:
            await self._ensure_email_available(body["email"], user_id=user_id)

        updated = to_user_record(await self._store.update(USERS, user_id, body)).to_public()
        logger.info(
            "user.updated user_id=%s fields=%s",
            safe_log_identifier(user_id, prefix="uid"),
            sorted(key for key in body if key != "password"),
        )
        return updated

    async def _ensure_email_available(self, email: str, *, user_id: str | None = None) -> None:
        existing = await self._store.list(USERS, email=email)
        if any(str(record.get("id")) != user_id for record in existing):
            raise ValidationError(
                "Invalid user fields",
                details={"errors": [{"field": "email", "message": "Email is already registered"}]},
            )

    async def delete_user(self, *, actor_id: str, role: Role, user_id: str) -> bool:
        if user_id == actor_id:
            logger.warning(
                "user.rejected user_id=%s reason=self_delete",
                safe_log_identifier(actor_id, prefix="uid"),
            )
            raise PermissionDeniedError(
                "You can't delete your own account",
                details={"action": "delete_user", "reason": "self_delete"},
            )
        ensure_permission(role, Action.MANAGE_USERS)

        await self._store.delete(USERS, user_id)
        logger.info("user.deleted user_id=%s", safe_log_identifier(user_id, prefix="uid"))
        return True


__all__ = ["PASSWORD_MIN_LENGTH", "UserService", "to_user_record"]
