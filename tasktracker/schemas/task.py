"""Task schemas."""

from datetime import date, datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Visibility(str, Enum):
    PRIVATE = "private"
    SHARED = "shared"


def _reject_bool_reward(value: object) -> object:
    if isinstance(value, bool):
        raise ValueError("Reward must be a number")
    return value


RewardInput = Annotated[float | str | None, BeforeValidator(_reject_bool_reward)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self, *, partial: bool = False) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=partial)


class Task(_CamelModel):
    id: str
    title: str
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    due_date: date | None = None
    reward: float = 0.0
    visibility: Visibility = Visibility.PRIVATE
    user_id: str
    created_by: str | None = None
    created_at: datetime | None = None


class TaskDraft(_CamelModel):
    """Unvalidated task input; field rules are enforced by the task service."""

    title: str = ""
    priority: Priority | str = Priority.MEDIUM
    due_date: date | str | None = None
    reward: RewardInput = None
    visibility: Visibility | str | None = None


class TaskPatch(_CamelModel):
    title: str | None = None
    priority: Priority | str | None = None
    completed: bool | None = None
    due_date: date | str | None = None
    reward: RewardInput = None
    visibility: Visibility | str | None = None
