"""Conversions between the flat task list and the nested task tree.

Storage holds tasks flat with a ``parent_id`` back-reference; views work on a
forest where each task carries its ``subtasks``. Working copies are always
made, so callers' task objects are never mutated.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Iterable

from todotree_cli.models import Task

logger = logging.getLogger(__name__)


def flatten_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Pre-order linearisation of a task forest.

    Each task is immediately followed by its own flattened subtasks, in child
    order.
    """
    result: list[Task] = []
    stack = list(reversed(list(tasks)))
    while stack:
        task = stack.pop()
        result.append(task)
        stack.extend(reversed(task.subtasks))
    return result


def build_task_hierarchy(tasks: Iterable[Task]) -> list[Task]:
    """Rebuild the task forest from a flat task list.

    Children keep the relative order they have in the input. A task whose
    parent is missing from the input is promoted to a root instead of being
    dropped. Tasks caught in a parent cycle are also promoted, so every input
    task appears exactly once in the result.

    Args:
        tasks: Flat tasks, typically ordered by their ``order`` index

    Returns:
        Root tasks with ``subtasks`` populated
    """
    flat = list(tasks)
    arena: dict[str, Task] = {
        task.id: task.model_copy(update={"subtasks": []}) for task in flat
    }

    roots: list[Task] = []
    placed: set[str] = set()
    for task in flat:
        if task.id in placed:
            continue
        placed.add(task.id)

        node = arena[task.id]
        parent = arena.get(task.parent_id) if task.parent_id else None
        if parent is not None and parent is not node:
            parent.subtasks.append(node)
            continue

        if task.parent_id and parent is None:
            logger.debug(
                "Task %s references missing parent %s, promoting to root",
                task.id,
                task.parent_id,
            )
        roots.append(node)

    reached = {task.id for task in flatten_tasks(roots)}
    if len(reached) == len(arena):
        return roots

    # Whatever is left sits on or below a parent cycle: detach it from its
    # parent and promote it, in input order, until everything is reachable.
    for task in flat:
        if task.id in reached:
            continue
        node = arena[task.id]
        parent = arena[node.parent_id]
        parent.subtasks = [child for child in parent.subtasks if child is not node]
        logger.warning(
            "Task %s is part of a parent cycle, promoting to root", task.id
        )
        roots.append(node)
        reached.update(t.id for t in flatten_tasks([node]))

    return roots


def find_task(tasks: Iterable[Task], task_id: str) -> Task | None:
    """Find a task anywhere in a forest by ID."""
    for task in flatten_tasks(tasks):
        if task.id == task_id:
            return task
    return None


def collect_descendant_ids(tasks: Iterable[Task], task_id: str) -> list[str]:
    """All transitive descendants of a task in a flat list, breadth first."""
    children: dict[str, list[str]] = defaultdict(list)
    for task in tasks:
        if task.parent_id:
            children[task.parent_id].append(task.id)

    descendants: list[str] = []
    seen = {task_id}
    queue = deque(children.get(task_id, []))
    while queue:
        child_id = queue.popleft()
        if child_id in seen:
            continue
        seen.add(child_id)
        descendants.append(child_id)
        queue.extend(children.get(child_id, []))
    return descendants


def would_create_cycle(
    tasks: Iterable[Task], task_id: str, new_parent_id: str | None
) -> bool:
    """Whether re-parenting ``task_id`` under ``new_parent_id`` makes a cycle."""
    if new_parent_id is None:
        return False
    if new_parent_id == task_id:
        return True
    return new_parent_id in collect_descendant_ids(tasks, task_id)


def sort_siblings(tasks: Iterable[Task]) -> list[Task]:
    """Copy of a forest with every sibling group in ascending ``order``."""
    ordered = sorted(tasks, key=lambda task: task.order)
    return [
        task.model_copy(update={"subtasks": sort_siblings(task.subtasks)})
        for task in ordered
    ]


def reorder_ids(task_ids: list[str], moved_id: str, new_index: int) -> list[str]:
    """Move one ID to a new position, shifting the others.

    The index is clamped to the bounds of the list.

    Raises:
        ValueError: If ``moved_id`` is not in ``task_ids``
    """
    if moved_id not in task_ids:
        raise ValueError(f"Task {moved_id} is not part of this group")
    remaining = [task_id for task_id in task_ids if task_id != moved_id]
    position = min(max(new_index, 0), len(remaining))
    remaining.insert(position, moved_id)
    return remaining
