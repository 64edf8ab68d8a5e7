"""Repository abstraction layer for todotree.

Repositories provide an abstraction over data persistence, allowing the
business logic to remain independent of the underlying storage mechanism.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todotree_cli.models import Task, TaskCreate, TaskFilters, TaskUpdate


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    All operations are scoped to the repository's owner. Tasks are returned
    flat: ``subtasks`` is always empty and ``parent_id`` carries the tree.
    """

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List the owner's tasks with optional filtering.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            Flat list of Task objects ordered by their order index, then
            creation time
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task at the end of its sibling group.

        Args:
            task_data: TaskCreate object with task details

        Returns:
            Created Task object with generated ID and timestamps
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task and bump its ``updated_at``.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_many(self, task_ids: list[str]) -> int:
        """Delete tasks by ID.

        Returns:
            Number of tasks removed
        """
        raise NotImplementedError(
            "TaskRepository.delete_many() must be implemented by adapter"
        )

    @abstractmethod
    async def update_order(self, ordered_ids: list[str]) -> None:
        """Persist a new ordering: each task's order becomes its list index."""
        raise NotImplementedError(
            "TaskRepository.update_order() must be implemented by adapter"
        )
