"""Tests for TaskService business rules.

Most tests run against a real in-memory SQLite store; a few use a mocked
repository to check the calls made.
"""

from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from todotree_cli.exceptions import (
    InvalidHierarchyError,
    TaskNotFoundError,
    ValidationFailedError,
)
from todotree_cli.models import TaskUpdate, Weight
from todotree_cli.services.task_service import TaskService

TODAY = date(2024, 6, 15)


class TestAddTask:
    async def test_root_gets_default_weight(self, task_service, notifier):
        task = await task_service.add_task("Plan trip")

        assert task.weight == Weight.NORMAL
        assert notifier.titles == ["Task created successfully!"]
        assert notifier.notifications[0].description == '"Plan trip" has been added.'

    async def test_configured_default_weight(self, sqlite_repo):
        service = TaskService(sqlite_repo, default_weight=Weight.HIGH)
        assert (await service.add_task("x")).weight == Weight.HIGH

    async def test_subtask_inherits_due_date_and_weight(self, task_service, notifier):
        parent = await task_service.add_task("Parent", due_date=TODAY, weight=5)

        child = await task_service.add_task("Child", parent_id=parent.id)

        assert child.parent_id == parent.id
        assert child.due_date == TODAY
        assert child.weight == Weight.MAXIMUM
        assert notifier.notifications[-1].description == '"Child" has been added as a subtask.'

    async def test_subtask_keeps_explicit_values(self, task_service):
        parent = await task_service.add_task("Parent", due_date=TODAY, weight=5)
        other_day = TODAY + timedelta(days=3)

        child = await task_service.add_task(
            "Child", parent_id=parent.id, due_date=other_day, weight=1
        )

        assert child.due_date == other_day
        assert child.weight == Weight.MINIMAL

    async def test_blank_title(self, task_service, notifier):
        with pytest.raises(ValidationFailedError, match="title"):
            await task_service.add_task("   ")
        assert notifier.notifications == []

    async def test_invalid_weight(self, task_service):
        with pytest.raises(ValidationFailedError):
            await task_service.add_task("x", weight=9)

    async def test_unknown_parent(self, task_service):
        with pytest.raises(TaskNotFoundError):
            await task_service.add_task("x", parent_id="missing")


class TestUpdateTask:
    async def test_update_fields(self, task_service, notifier):
        task = await task_service.add_task("old", due_date=TODAY)

        updated = await task_service.update_task(
            task.id, title="new", weight=2, clear_due_date=True
        )

        assert updated.title == "new"
        assert updated.weight == Weight.LOW
        assert updated.due_date is None
        assert notifier.titles[-1] == "Task updated successfully!"

    async def test_reparent(self, task_service):
        a = await task_service.add_task("a")
        b = await task_service.add_task("b")

        moved = await task_service.update_task(b.id, parent_id=a.id)

        assert moved.parent_id == a.id
        tree = await task_service.get_task_tree()
        assert [t.id for t in tree] == [a.id]
        assert [t.id for t in tree[0].subtasks] == [b.id]

    async def test_reparent_under_descendant_rejected(self, task_service):
        a = await task_service.add_task("a")
        b = await task_service.add_task("b", parent_id=a.id)
        c = await task_service.add_task("c", parent_id=b.id)

        with pytest.raises(InvalidHierarchyError):
            await task_service.update_task(a.id, parent_id=c.id)
        with pytest.raises(InvalidHierarchyError):
            await task_service.update_task(a.id, parent_id=a.id)

    async def test_make_root(self, task_service):
        a = await task_service.add_task("a")
        b = await task_service.add_task("b", parent_id=a.id)

        assert (await task_service.update_task(b.id, make_root=True)).parent_id is None

    async def test_blank_title(self, task_service):
        task = await task_service.add_task("x")
        with pytest.raises(ValidationFailedError):
            await task_service.update_task(task.id, title=" ")


class TestToggleComplete:
    async def test_toggle_back_and_forth(self, task_service):
        task = await task_service.add_task("x")

        assert (await task_service.toggle_complete(task.id)).completed is True
        assert (await task_service.toggle_complete(task.id)).completed is False

    async def test_last_subtask_completes_parent(self, task_service, notifier):
        parent = await task_service.add_task("Parent")
        first = await task_service.add_task("first", parent_id=parent.id)
        second = await task_service.add_task("second", parent_id=parent.id)

        await task_service.toggle_complete(first.id)
        assert (await task_service.get_task(parent.id)).completed is False

        await task_service.toggle_complete(second.id)
        assert (await task_service.get_task(parent.id)).completed is True
        assert "All subtasks done" in notifier.titles

    async def test_roll_up_is_recursive(self, task_service):
        root = await task_service.add_task("root")
        middle = await task_service.add_task("middle", parent_id=root.id)
        leaf = await task_service.add_task("leaf", parent_id=middle.id)

        await task_service.toggle_complete(leaf.id)

        assert (await task_service.get_task(middle.id)).completed is True
        assert (await task_service.get_task(root.id)).completed is True

    async def test_roll_up_stops_at_open_sibling(self, task_service):
        root = await task_service.add_task("root")
        middle = await task_service.add_task("middle", parent_id=root.id)
        await task_service.add_task("open sibling", parent_id=root.id)
        leaf = await task_service.add_task("leaf", parent_id=middle.id)

        await task_service.toggle_complete(leaf.id)

        assert (await task_service.get_task(middle.id)).completed is True
        assert (await task_service.get_task(root.id)).completed is False

    async def test_reopening_does_not_touch_parent(self, task_service):
        parent = await task_service.add_task("Parent")
        child = await task_service.add_task("child", parent_id=parent.id)
        await task_service.toggle_complete(child.id)

        await task_service.toggle_complete(child.id)

        assert (await task_service.get_task(parent.id)).completed is True


class TestDeleteTask:
    async def test_cascades_whole_subtree(self, task_service, notifier):
        root = await task_service.add_task("root")
        child = await task_service.add_task("child", parent_id=root.id)
        grandchild = await task_service.add_task("grandchild", parent_id=child.id)
        keep = await task_service.add_task("keep")

        removed = await task_service.delete_task(root.id)

        assert removed == [root.id, child.id, grandchild.id]
        assert [t.id for t in await task_service.list_tasks(status="all")] == [keep.id]
        assert notifier.notifications[-1].description == (
            '"root" has been removed with 2 subtasks.'
        )

    async def test_leaf(self, task_service, notifier):
        task = await task_service.add_task("leaf")
        assert await task_service.delete_task(task.id) == [task.id]
        assert notifier.notifications[-1].description == '"leaf" has been removed.'

    async def test_missing(self, task_service):
        with pytest.raises(TaskNotFoundError):
            await task_service.delete_task("nope")


class TestOrdering:
    async def test_move_task(self, task_service):
        a = await task_service.add_task("a")
        b = await task_service.add_task("b")
        c = await task_service.add_task("c")

        ordered = await task_service.move_task(c.id, 0)

        assert ordered == [c.id, a.id, b.id]
        roots = await task_service.list_tasks(status="all", root_only=True)
        assert [t.id for t in roots] == [c.id, a.id, b.id]

    async def test_move_subtask_stays_in_its_group(self, task_service):
        parent = await task_service.add_task("parent")
        x = await task_service.add_task("x", parent_id=parent.id)
        y = await task_service.add_task("y", parent_id=parent.id)

        assert await task_service.move_task(x.id, 5) == [y.id, x.id]

    async def test_reorder_requires_shared_parent(self, task_service):
        a = await task_service.add_task("a")
        b = await task_service.add_task("b", parent_id=a.id)

        with pytest.raises(InvalidHierarchyError):
            await task_service.reorder_tasks([a.id, b.id])

    async def test_reorder(self, task_service):
        a = await task_service.add_task("a")
        b = await task_service.add_task("b")

        await task_service.reorder_tasks([b.id, a.id])

        roots = await task_service.list_tasks(status="all")
        assert [t.id for t in roots] == [b.id, a.id]


class TestQueries:
    async def test_active_tree_promotes_open_children_of_completed_parent(self, task_service):
        parent = await task_service.add_task("parent")
        child = await task_service.add_task("child", parent_id=parent.id)
        await task_service.add_task("other child", parent_id=parent.id)
        await task_service.repository.update(parent.id, TaskUpdate(completed=True))

        tree = await task_service.get_task_tree(status="active")

        assert parent.id not in [t.id for t in tree]
        assert child.id in [t.id for t in tree]

    async def test_get_urgent_tasks(self, task_service, now):
        parent = await task_service.add_task("parent", due_date=TODAY + timedelta(days=7), weight=1)
        await task_service.add_task(
            "urgent child", parent_id=parent.id, due_date=TODAY, weight=5
        )
        await task_service.add_task("undated")

        urgent = await task_service.get_urgent_tasks(now, count=2)

        assert [t.title for t in urgent] == ["urgent child", "parent"]

    async def test_send_reminders(self, task_service, notifier, now):
        await task_service.add_task("Pay rent", due_date=TODAY)
        notifier.notifications.clear()

        reminders = await task_service.send_reminders(now)

        assert [r.title for r in reminders] == ["1 task due today!"]
        assert notifier.titles == ["1 task due today!"]


class TestWithMockRepository:
    async def test_list_tasks_builds_filters(self):
        repo = MagicMock()
        repo.list_all = AsyncMock(return_value=[])
        service = TaskService(repo)

        await service.list_tasks(status="completed", search="milk", limit=3)

        filters = repo.list_all.await_args.args[0]
        assert filters.status == "completed"
        assert filters.search == "milk"
        assert filters.limit == 3

    async def test_no_notifier_is_fine(self, make_task):
        repo = MagicMock()
        repo.add = AsyncMock(return_value=make_task("t1"))
        service = TaskService(repo, notifier=None)

        task = await service.add_task("t1")

        assert task.id == "t1"
        repo.add.assert_awaited_once()
