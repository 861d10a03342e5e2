"""Task board local-state synchronisation tests."""

from __future__ import annotations

import unittest

from tasktracker.adapters.session_storage import MemorySessionStorage
from tasktracker.errors import AuthenticationError, DataAccessError, PermissionDeniedError, RecordNotFoundError
from tasktracker.services.session import Session
from tasktracker.services.task_board import TaskBoard
from tasktracker.services.tasks import TaskService
from tests.fakes import CapturingStore, fixed_clock


class TaskBoardTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.store = CapturingStore()
        self.session = Session(self.store, MemorySessionStorage())
        self.board = TaskBoard(TaskService(self.store, clock=fixed_clock), self.session)

    async def test_anonymous_board_refuses_to_act(self) -> None:
        with self.assertRaises(AuthenticationError):
            await self.board.refresh()
        with self.assertRaises(AuthenticationError):
            await self.board.add({"title": "Sweep"})
        self.assertEqual(self.store.calls, [])

    async def test_add_toggle_remove_follow_store(self) -> None:
        await self.session.sign_in("sam@example.com", "sam-secret")

        task = await self.board.add({"title": "Sweep porch", "reward": "1.50"})
        self.assertEqual(task.created_by, "Sam")
        self.assertEqual(task.user_id, "u-sam")
        self.assertEqual([t.id for t in self.board.tasks], [task.id])

        toggled = await self.board.toggle(task.id)
        self.assertTrue(toggled.completed)
        self.assertTrue(self.board.tasks[0].completed)

        await self.board.remove(task.id)
        self.assertEqual(self.board.tasks, [])
        self.assertEqual(await self.board.refresh(), [])

    async def test_refresh_picks_up_shared_tasks_from_others(self) -> None:
        await self.session.sign_in("alex@example.com", "admin-secret")
        shared = await self.board.add({"title": "Clean garage", "visibility": "shared"})
        self.session.sign_out()

        await self.session.sign_in("vic@example.com", "vic-secret")
        tasks = await self.board.refresh()
        self.assertEqual([task.id for task in tasks], [shared.id])

    async def test_failed_calls_leave_local_list_untouched(self) -> None:
        await self.session.sign_in("sam@example.com", "sam-secret")
        task = await self.board.add({"title": "Dishes"})
        before = self.board.tasks

        self.store.fail_on.update({"update", "delete", "create"})
        with self.assertRaises(DataAccessError):
            await self.board.toggle(task.id)
        with self.assertRaises(DataAccessError):
            await self.board.remove(task.id)
        with self.assertRaises(DataAccessError):
            await self.board.add({"title": "Laundry"})

        self.assertEqual(self.board.tasks, before)
        self.assertFalse(self.board.tasks[0].completed)

    async def test_viewer_rejections_leave_local_list_untouched(self) -> None:
        await self.session.sign_in("alex@example.com", "admin-secret")
        shared = await self.board.add({"title": "Shared chore", "visibility": "shared"})
        self.session.sign_out()

        await self.session.sign_in("vic@example.com", "vic-secret")
        await self.board.refresh()
        with self.assertRaises(PermissionDeniedError):
            await self.board.toggle(shared.id)
        with self.assertRaises(PermissionDeniedError):
            await self.board.remove(shared.id)
        self.assertEqual([task.id for task in self.board.tasks], [shared.id])

    async def test_toggle_unknown_task_is_not_found(self) -> None:
        await self.session.sign_in("sam@example.com", "sam-secret")
        with self.assertRaises(RecordNotFoundError):
            await self.board.toggle("not-on-board")
