"""Session holder for the authenticated user."""

from __future__ import annotations

import logging
from secrets import compare_digest

from tasktracker.adapters.session_storage import SessionStorage
from tasktracker.adapters.store import RecordStore
from tasktracker.core.logging_safety import safe_log_identifier
from tasktracker.errors import AuthenticationError, DataAccessError, RecordNotFoundError
from tasktracker.schemas.user import StoredSession, User
from tasktracker.services.users import USERS, to_user_record

logger = logging.getLogger(__name__)


class Session:
    """Anonymous until ``sign_in`` succeeds or ``restore`` finds a live stored user.

    The durable copy in ``storage`` is written on every sign-in, cleared on
    sign-out, and never holds a credential.
    """

    def __init__(self, store: RecordStore, storage: SessionStorage) -> None:
        self._store = store
        self._storage = storage
        self._user: User | None = None

    @property
    def current_user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def require_user(self) -> User:
        if self._user is None:
            raise AuthenticationError("Sign in required", code="NOT_AUTHENTICATED")
        return self._user

    async def restore(self) -> User | None:
        """Re-validate the stored user against the record store."""
        stored = self._storage.load()
        if stored is None:
            self._storage.clear()
            return None

        safe_user_id = safe_log_identifier(stored.id, prefix="uid")
        try:
            user = to_user_record(await self._store.get(USERS, stored.id)).to_public()
        except RecordNotFoundError:
            logger.info("session.restore_dropped user_id=%s reason=user_missing", safe_user_id)
            self._storage.clear()
            self._user = None
            return None
        except DataAccessError:
            logger.warning("session.restore_failed user_id=%s reason=store_unavailable_or_malformed", safe_user_id)
            self._user = None
            return None

        self._user = user
        self._storage.save(StoredSession.model_validate(self._user.model_dump()))
        logger.info("session.restored user_id=%s role=%s", safe_user_id, self._user.role.value)
        return self._user

    async def sign_in(self, email: str, password: str) -> User:
        records = await self._store.list(USERS, email=email.strip())
        candidate = to_user_record(records[0]) if records else None

        stored_secret = candidate.password if candidate is not None else ""
        matched = compare_digest(stored_secret.encode("utf-8"), password.encode("utf-8"))
        if candidate is None or not candidate.password or not matched:
            logger.warning("session.sign_in_rejected reason=invalid_credentials")
            raise AuthenticationError("Invalid email or password")

        user = candidate.to_public()
        self._storage.save(StoredSession.model_validate(user.model_dump()))
        self._user = user
        logger.info(
            "session.signed_in user_id=%s role=%s",
            safe_log_identifier(user.id, prefix="uid"),
            user.role.value,
        )
        return user

    def sign_out(self) -> None:
        if self._user is not None:
            logger.info("session.signed_out user_id=%s", safe_log_identifier(self._user.id, prefix="uid"))
        self._user = None
        self._storage.clear()


__all__ = ["Session"]
