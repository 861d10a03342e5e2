"""Session holder and durable session storage tests."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from tasktracker.adapters.session_storage import FileSessionStorage, MemorySessionStorage
from tasktracker.errors import AuthenticationError, DataAccessError
from tasktracker.schemas.user import Role, StoredSession
from tasktracker.services.session import Session
from tests.fakes import CapturingStore


class SessionTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.store = CapturingStore()
        self.storage = MemorySessionStorage()
        self.session = Session(self.store, self.storage)

    async def test_starts_anonymous(self) -> None:
        self.assertFalse(self.session.is_authenticated)
        self.assertIsNone(self.session.current_user)
        with self.assertRaises(AuthenticationError) as context:
            self.session.require_user()
        self.assertEqual(context.exception.code, "NOT_AUTHENTICATED")

    async def test_sign_in_strips_credential_and_persists_public_user(self) -> None:
        user = await self.session.sign_in("sam@example.com", "sam-secret")

        self.assertTrue(self.session.is_authenticated)
        self.assertEqual(user.id, "u-sam")
        self.assertIs(user.role, Role.STANDARD)
        self.assertNotIn("password", user.model_dump())
        self.assertEqual(
            self.storage.value,
            StoredSession(id="u-sam", name="Sam", email="sam@example.com", role=Role.STANDARD),
        )
        self.assertNotIn("password", self.storage.value.model_dump())

    async def test_wrong_secret_leaves_session_anonymous_and_storage_unchanged(self) -> None:
        previous = StoredSession(id="u-vic", name="Vic", role=Role.VIEWER)
        self.storage.value = previous

        with self.assertRaises(AuthenticationError) as context:
            await self.session.sign_in("sam@example.com", "wrong-secret")

        self.assertEqual(context.exception.code, "INVALID_CREDENTIALS")
        self.assertFalse(self.session.is_authenticated)
        self.assertIs(self.storage.value, previous)

    async def test_unknown_email_is_rejected_like_wrong_secret(self) -> None:
        with self.assertRaises(AuthenticationError) as context:
            await self.session.sign_in("nobody@example.com", "whatever")
        self.assertEqual(str(context.exception), "Invalid email or password")
        self.assertIsNone(self.storage.value)

    async def test_user_without_stored_secret_cannot_sign_in(self) -> None:
        self.store.store.create_record(
            "users",
            {"id": "u-blank", "name": "Blank", "email": "blank@example.com", "role": "user"},
        )
        with self.assertRaises(AuthenticationError):
            await self.session.sign_in("blank@example.com", "")

    async def test_store_failure_during_sign_in_propagates_without_state_change(self) -> None:
        self.store.fail_on.add("list")
        with self.assertRaises(DataAccessError):
            await self.session.sign_in("sam@example.com", "sam-secret")
        self.assertFalse(self.session.is_authenticated)
        self.assertIsNone(self.storage.value)

    async def test_sign_out_clears_memory_and_durable_state(self) -> None:
        await self.session.sign_in("alex@example.com", "admin-secret")
        self.session.sign_out()

        self.assertFalse(self.session.is_authenticated)
        self.assertIsNone(self.storage.value)

    async def test_restore_revalidates_stored_user_against_store(self) -> None:
        self.storage.value = StoredSession(id="u-admin", name="Old Name", role=Role.ADMINISTRATOR)

        user = await self.session.restore()

        self.assertIsNotNone(user)
        assert user is not None
        self.assertEqual(user.name, "Alex")
        self.assertEqual(self.session.current_user, user)
        self.assertEqual(self.storage.value.name, "Alex")
        self.assertIn(("get", "users"), self.store.calls)

    async def test_restore_drops_stale_session_when_user_is_gone(self) -> None:
        self.storage.value = StoredSession(id="u-deleted", name="Ghost", role=Role.STANDARD)

        self.assertIsNone(await self.session.restore())

        self.assertFalse(self.session.is_authenticated)
        self.assertIsNone(self.storage.value)

    async def test_restore_keeps_durable_copy_when_store_is_unreachable(self) -> None:
        stored = StoredSession(id="u-sam", name="Sam", role=Role.STANDARD)
        self.storage.value = stored
        self.store.fail_on.add("get")

        self.assertIsNone(await self.session.restore())

        self.assertFalse(self.session.is_authenticated)
        self.assertIs(self.storage.value, stored)

    async def test_restore_with_malformed_stored_user_stays_anonymous(self) -> None:
        self.store.store.update_record("users", "u-sam", {"role": "superuser"})
        stored = StoredSession(id="u-sam", name="Sam", role=Role.STANDARD)
        self.storage.value = stored

        self.assertIsNone(await self.session.restore())

        self.assertFalse(self.session.is_authenticated)
        self.assertIs(self.storage.value, stored)

    async def test_restore_without_stored_session_stays_anonymous(self) -> None:
        self.assertIsNone(await self.session.restore())
        self.assertEqual(self.store.calls, [])


class FileSessionStorageTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "session.json"
        self.storage = FileSessionStorage(self.path)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_loads_as_no_session(self) -> None:
        self.assertIsNone(self.storage.load())

    def test_save_load_and_clear(self) -> None:
        session = StoredSession(id="u-sam", name="Sam", email="sam@example.com", role=Role.STANDARD)
        self.storage.save(session)

        self.assertTrue(self.path.exists())
        self.assertNotIn("password", self.path.read_text(encoding="utf-8"))
        self.assertEqual(self.storage.load(), session)

        self.storage.clear()
        self.assertFalse(self.path.exists())
        self.storage.clear()

    def test_corrupt_file_loads_as_no_session(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        self.assertIsNone(self.storage.load())

    def test_unknown_role_in_file_loads_as_no_session(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text('{"id": "u-1", "name": "A", "role": "root"}', encoding="utf-8")
        self.assertIsNone(self.storage.load())
