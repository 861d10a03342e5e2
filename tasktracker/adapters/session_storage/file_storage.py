"""JSON file session storage."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from tasktracker.adapters.session_storage.base import SessionStorage
from tasktracker.schemas.user import StoredSession

logger = logging.getLogger(__name__)


class FileSessionStorage(SessionStorage):
    """Keeps the last authenticated user in a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoredSession | None:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            return StoredSession.model_validate_json(raw)
        except PydanticValidationError:
            # Unreadable content is treated as no session; restore() clears it.
            logger.warning("session_storage.corrupt path=%s", self._path)
            return None

    def save(self, session: StoredSession) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(session.model_dump_json(), encoding="utf-8")
        tmp_path.replace(self._path)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


__all__ = ["FileSessionStorage"]
