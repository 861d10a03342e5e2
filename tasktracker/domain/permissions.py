"""Role to permission rules."""

from enum import Enum

from tasktracker.errors import PermissionDeniedError, ValidationError
from tasktracker.schemas.user import Role


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE_USERS = "manage_users"
    CREATE_SHARED = "create_shared"


_PERMISSIONS: dict[Role, frozenset[Action]] = {
    Role.ADMINISTRATOR: frozenset(
        {
            Action.CREATE,
            Action.READ,
            Action.UPDATE,
            Action.DELETE,
            Action.MANAGE_USERS,
            Action.CREATE_SHARED,
        }
    ),
    Role.STANDARD: frozenset({Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE}),
    Role.VIEWER: frozenset({Action.READ}),
}


def parse_role(value: Role | str) -> Role:
    """Normalize role text; unknown roles are rejected rather than given a default."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip())
    except ValueError as exc:
        raise ValidationError(
            "Unknown role",
            details={"errors": [{"field": "role", "message": f"unknown role {value!r}"}]},
        ) from exc


def permissions_for(role: Role) -> frozenset[Action]:
    """Return the fixed action set for a role."""
    return _PERMISSIONS[parse_role(role)]


def has_permission(role: Role, action: Action) -> bool:
    return action in permissions_for(role)


def ensure_permission(role: Role, action: Action) -> None:
    """Raise when the role lacks the action."""
    role = parse_role(role)
    if action not in _PERMISSIONS[role]:
        raise PermissionDeniedError(
            f"Role {role.value!r} may not {action.value}",
            details={"role": role.value, "action": action.value},
        )
