"""User schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    ADMINISTRATOR = "admin"
    STANDARD = "user"
    VIEWER = "viewer"


class User(BaseModel):
    """Credential-free user as exposed to callers."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    email: str | None = None
    role: Role


class UserRecord(User):
    """Stored user including the credential; never leaves the service layer."""

    password: str = ""

    def to_public(self) -> User:
        return User.model_validate(self.model_dump(exclude={"password"}))


class NewUser(BaseModel):
    name: str
    email: str
    password: str
    role: Role = Role.STANDARD


class UserPatch(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: Role | None = None


class StoredSession(BaseModel):
    """Durable copy of the last authenticated user."""

    id: str = Field(min_length=1)
    name: str
    email: str | None = None
    role: Role
