"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. It owns the rules
that span several records: subtask inheritance, re-parenting checks,
completion roll-up, cascading deletes and sibling reordering.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from pydantic import ValidationError

from todotree_cli.exceptions import InvalidHierarchyError, ValidationFailedError
from todotree_cli.models import Notification, Task, TaskCreate, TaskFilters, TaskUpdate, Weight
from todotree_cli.repositories import TaskRepository
from todotree_cli.services.notification_service import Notifier
from todotree_cli.utils.hierarchy import (
    build_task_hierarchy,
    collect_descendant_ids,
    reorder_ids,
    would_create_cycle,
)
from todotree_cli.utils.priority import DEFAULT_TOP_COUNT, get_top_urgent_tasks
from todotree_cli.utils.reminders import DEFAULT_PREVIEW, build_due_reminders

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task repository. Successful mutations are reported through the
    optional notifier; failures propagate to the caller.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        notifier: Notifier | None = None,
        default_weight: Weight = Weight.NORMAL,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            notifier: Where success messages go (none are sent when None)
            default_weight: Weight of new root tasks created without one
        """
        self.repository = task_repository
        self.notifier = notifier
        self.default_weight = default_weight

    def _notify(self, title: str, description: str = "", variant: str = "success") -> None:
        if self.notifier is not None:
            self.notifier.notify(
                Notification(title=title, description=description, variant=variant)
            )

    async def list_tasks(
        self,
        *,
        status: str | None = None,
        parent_id: str | None = None,
        root_only: bool = False,
        due_on: date | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        """List tasks flat, in order-index order.

        Args:
            status: Filter by status ("active", "completed", "all")
            parent_id: Only direct children of this task
            root_only: Only tasks without a parent
            due_on: Only tasks due on this date
            search: Substring search on title and description
            limit: Maximum number of results

        Returns:
            List of Task objects matching the criteria
        """
        filters = TaskFilters(
            status=status,
            parent_id=parent_id,
            root_only=root_only,
            due_on=due_on,
            search=search,
            limit=limit,
        )
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return await self.repository.get(task_id)

    async def get_task_tree(self, status: str = "all") -> list[Task]:
        """Load the task forest.

        With ``status="active"`` open subtasks of a completed parent show up
        as roots.
        """
        return build_task_hierarchy(await self.list_tasks(status=status))

    async def add_task(
        self,
        title: str,
        *,
        description: str = "",
        due_date: date | None = None,
        weight: int | None = None,
        parent_id: str | None = None,
    ) -> Task:
        """Create a new task.

        A subtask created without a due date or weight inherits the parent's.

        Args:
            title: Task title (required, not blank)
            description: Detailed description
            due_date: Due date
            weight: Importance 1-5
            parent_id: Parent task ID for subtasks

        Returns:
            Created Task object

        Raises:
            ValidationFailedError: If the title or weight is invalid
            TaskNotFoundError: If the parent does not exist
        """
        if parent_id is not None:
            parent = await self.repository.get(parent_id)
            due_date = due_date or parent.due_date
            weight = weight or parent.weight
        elif weight is None:
            weight = self.default_weight

        try:
            task_data = TaskCreate(
                title=title,
                description=description or "",
                due_date=due_date,
                weight=weight,
                parent_id=parent_id,
            )
        except ValidationError as e:
            raise ValidationFailedError(_describe(e)) from e

        task = await self.repository.add(task_data)
        suffix = " as a subtask" if parent_id else ""
        self._notify("Task created successfully!", f'"{task.title}" has been added{suffix}.')
        return task

    async def update_task(
        self,
        task_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        due_date: date | None = None,
        clear_due_date: bool = False,
        weight: int | None = None,
        parent_id: str | None = None,
        make_root: bool = False,
    ) -> Task:
        """Update an existing task.

        Raises:
            ValidationFailedError: If a new value is invalid
            TaskNotFoundError: If the task or new parent does not exist
            InvalidHierarchyError: If the new parent is the task or one of
                its descendants
        """
        if parent_id is not None:
            await self.repository.get(parent_id)
            all_tasks = await self.list_tasks(status="all")
            if would_create_cycle(all_tasks, task_id, parent_id):
                raise InvalidHierarchyError(
                    f"Cannot move task {task_id} under its own subtask {parent_id}"
                )

        try:
            updates = TaskUpdate(
                title=title,
                description=description,
                due_date=due_date,
                clear_due_date=clear_due_date,
                weight=weight,
                parent_id=parent_id,
                make_root=make_root,
            )
        except ValidationError as e:
            raise ValidationFailedError(_describe(e)) from e

        task = await self.repository.update(task_id, updates)
        self._notify("Task updated successfully!", f'"{task.title}" has been updated.')
        return task

    async def toggle_complete(self, task_id: str) -> Task:
        """Flip a task's completion flag.

        Completing the last open subtask of a parent completes the parent as
        well, and so on up the tree.

        Returns:
            The toggled task
        """
        task = await self.repository.get(task_id)
        toggled = await self.repository.update(
            task_id, TaskUpdate(completed=not task.completed)
        )

        if toggled.completed:
            await self._complete_finished_parents(toggled)
        return toggled

    async def _complete_finished_parents(self, task: Task) -> None:
        current = task
        while current.parent_id is not None:
            siblings = await self.list_tasks(status="all", parent_id=current.parent_id)
            if not all(s.completed for s in siblings if s.id != current.id):
                return
            parent = await self.repository.get(current.parent_id)
            if parent.completed:
                return
            current = await self.repository.update(
                parent.id, TaskUpdate(completed=True)
            )
            logger.info("Auto-completed task %s, all subtasks done", parent.id)
            self._notify(
                "All subtasks done",
                f'"{parent.title}" has been completed.',
                variant="info",
            )

    async def delete_task(self, task_id: str) -> list[str]:
        """Delete a task together with its entire subtree.

        Returns:
            IDs of every removed task, the task itself first
        """
        task = await self.repository.get(task_id)
        all_tasks = await self.list_tasks(status="all")
        removed = [task_id, *collect_descendant_ids(all_tasks, task_id)]

        await self.repository.delete_many(removed)

        extra = len(removed) - 1
        detail = f" with {extra} subtask{'s' if extra > 1 else ''}" if extra else ""
        self._notify("Task deleted", f'"{task.title}" has been removed{detail}.')
        return removed

    async def reorder_tasks(self, ordered_ids: list[str]) -> None:
        """Store a new manual order for one sibling group.

        Raises:
            TaskNotFoundError: If an ID is unknown
            InvalidHierarchyError: If the IDs do not share a parent
        """
        tasks = [await self.repository.get(task_id) for task_id in ordered_ids]
        if len({task.parent_id for task in tasks}) > 1:
            raise InvalidHierarchyError("Only tasks with the same parent can be reordered")
        await self.repository.update_order(ordered_ids)

    async def move_task(self, task_id: str, new_index: int) -> list[str]:
        """Move a task to a new position among its siblings.

        Returns:
            The sibling IDs in their new order
        """
        task = await self.repository.get(task_id)
        if task.parent_id is None:
            siblings = await self.list_tasks(status="all", root_only=True)
        else:
            siblings = await self.list_tasks(status="all", parent_id=task.parent_id)

        ordered = reorder_ids([s.id for s in siblings], task_id, new_index)
        await self.repository.update_order(ordered)
        return ordered

    async def get_urgent_tasks(
        self, now: date | datetime, count: int = DEFAULT_TOP_COUNT
    ) -> list[Task]:
        """Most urgent open tasks across the whole tree."""
        return get_top_urgent_tasks(await self.get_task_tree(), now, count)

    async def send_reminders(
        self, now: date | datetime, preview: int = DEFAULT_PREVIEW
    ) -> list[Notification]:
        """Notify about tasks due today and tomorrow.

        Returns:
            The reminders that were sent
        """
        reminders = build_due_reminders(await self.get_task_tree(), now, preview)
        if self.notifier is not None:
            for reminder in reminders:
                self.notifier.notify(reminder)
        return reminders


def _describe(error: ValidationError) -> str:
    """Compact one-line summary of a pydantic validation error."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


def get_task_service() -> TaskService:
    """Build a TaskService for the configured local task store."""
    from todotree_cli.adapters.sqlite import SqliteTaskRepository
    from todotree_cli.services.config_service import get_config_service
    from todotree_cli.services.notification_service import ConsoleNotifier

    config_svc = get_config_service()
    config = config_svc.config
    repository = SqliteTaskRepository(
        db_path=str(config_svc.get_db_path()),
        user_id=config.storage.user_id,
    )
    return TaskService(
        repository,
        notifier=ConsoleNotifier(),
        default_weight=Weight(config.urgency.default_weight),
    )
