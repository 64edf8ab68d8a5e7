"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from todotree_cli.adapters.sqlite.connection import get_connection
from todotree_cli.adapters.sqlite.user_manager import get_or_create_local_user
from todotree_cli.adapters.sqlite.utils import (
    generate_uuid,
    now_iso,
    placeholders,
    row_to_dict,
)
from todotree_cli.exceptions import InvalidHierarchyError, TaskNotFoundError
from todotree_cli.models import Task, TaskCreate, TaskFilters, TaskUpdate, Weight
from todotree_cli.repositories import TaskRepository

logger = logging.getLogger(__name__)


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | None = None,
        user_id: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            user_id: Owner of the tasks. The first local user is used when None.
            connection: Already configured connection (mainly for tests).
        """
        self.db_path = db_path
        self._connection = connection
        self._preferred_user_id = user_id
        self._user_id: str | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _get_user_id(self) -> str:
        """Get the owner ID, creating the local user on first use."""
        if self._user_id is None:
            self._user_id = get_or_create_local_user(
                self.connection, self._preferred_user_id
            )
        return self._user_id

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List the owner's tasks with filtering."""
        query = "SELECT t.* FROM tasks t WHERE t.user_id = ?"
        params: list[Any] = [self._get_user_id()]

        if filters.status == "active":
            query += " AND t.completed = 0"
        elif filters.status == "completed":
            query += " AND t.completed = 1"
        # "all" means no filter on completed

        if filters.root_only:
            query += " AND t.parent_task_id IS NULL"
        elif filters.parent_id:
            query += " AND t.parent_task_id = ?"
            params.append(filters.parent_id)

        if filters.due_on:
            query += " AND t.due_date = ?"
            params.append(filters.due_on.isoformat())

        if filters.search:
            query += " AND (t.title LIKE ? OR t.description LIKE ?)"
            search_term = f"%{filters.search}%"
            params.extend([search_term, search_term])

        query += " ORDER BY t.order_position ASC, t.created_at ASC"

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)

        rows = self.connection.execute(query, params).fetchall()
        return [Task.from_record(row_to_dict(row)) for row in rows]

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        row = self.connection.execute(
            "SELECT * FROM tasks WHERE id = ? AND user_id = ?",
            (task_id, self._get_user_id()),
        ).fetchone()

        if not row:
            raise TaskNotFoundError(task_id)

        return Task.from_record(row_to_dict(row))

    def _next_order(self, user_id: str, parent_id: str | None) -> int:
        """Order index placing a new task after its last sibling."""
        row = self.connection.execute(
            """SELECT COALESCE(MAX(order_position) + 1, 0) FROM tasks
               WHERE user_id = ? AND parent_task_id IS ?""",
            (user_id, parent_id),
        ).fetchone()
        return row[0]

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task."""
        user_id = self._get_user_id()
        task_id = generate_uuid()
        now = now_iso()
        weight = task_data.weight if task_data.weight is not None else Weight.NORMAL

        try:
            self.connection.execute(
                """INSERT INTO tasks (
                    id, user_id, title, description, due_date, weight,
                    parent_task_id, completed, order_position, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task_id,
                    user_id,
                    task_data.title,
                    task_data.description or None,
                    task_data.due_date.isoformat() if task_data.due_date else None,
                    int(weight),
                    task_data.parent_id,
                    False,
                    self._next_order(user_id, task_data.parent_id),
                    now,
                    now,
                ),
            )
            self.connection.commit()
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            raise InvalidHierarchyError(
                f"Parent task does not exist: {task_data.parent_id}"
            ) from e

        logger.info("Created task %s (parent=%s)", task_id, task_data.parent_id)
        return await self.get(task_id)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task."""
        user_id = self._get_user_id()
        # Raises TaskNotFoundError for unknown or foreign tasks
        await self.get(task_id)

        columns: dict[str, Any] = {}
        if updates.title is not None:
            columns["title"] = updates.title
        if updates.description is not None:
            columns["description"] = updates.description or None
        if updates.clear_due_date:
            columns["due_date"] = None
        elif updates.due_date is not None:
            columns["due_date"] = updates.due_date.isoformat()
        if updates.weight is not None:
            columns["weight"] = int(updates.weight)
        if updates.completed is not None:
            columns["completed"] = updates.completed
        if updates.make_root:
            columns["parent_task_id"] = None
        elif updates.parent_id is not None:
            columns["parent_task_id"] = updates.parent_id
        if updates.order is not None:
            columns["order_position"] = updates.order

        set_parts = [f"{column} = ?" for column in columns]
        params: list[Any] = list(columns.values())

        # Every mutation bumps updated_at
        set_parts.append("updated_at = ?")
        params.append(now_iso())
        params.extend([task_id, user_id])

        try:
            self.connection.execute(
                f"UPDATE tasks SET {', '.join(set_parts)} WHERE id = ? AND user_id = ?",
                params,
            )
            self.connection.commit()
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            raise InvalidHierarchyError(
                f"Parent task does not exist: {updates.parent_id}"
            ) from e

        logger.debug("Updated task %s: %s", task_id, sorted(columns))
        return await self.get(task_id)

    async def delete_many(self, task_ids: list[str]) -> int:
        """Delete tasks by ID (children of a deleted task cascade)."""
        if not task_ids:
            return 0
        user_id = self._get_user_id()
        marks = placeholders(len(task_ids))

        count = self.connection.execute(
            f"SELECT COUNT(*) FROM tasks WHERE user_id = ? AND id IN ({marks})",
            [user_id, *task_ids],
        ).fetchone()[0]
        self.connection.execute(
            f"DELETE FROM tasks WHERE user_id = ? AND id IN ({marks})",
            [user_id, *task_ids],
        )
        self.connection.commit()

        logger.info("Deleted %d task(s)", count)
        return count

    async def update_order(self, ordered_ids: list[str]) -> None:
        """Persist order indexes in a single transaction."""
        user_id = self._get_user_id()
        now = now_iso()
        try:
            self.connection.executemany(
                """UPDATE tasks SET order_position = ?, updated_at = ?
                   WHERE id = ? AND user_id = ?""",
                [
                    (position, now, task_id, user_id)
                    for position, task_id in enumerate(ordered_ids)
                ],
            )
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise
