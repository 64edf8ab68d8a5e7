"""Task helper utilities."""

from __future__ import annotations

from todotree_cli.exceptions import TaskNotFoundError, ValidationFailedError
from todotree_cli.models import Task


def find_shortest_unique_suffix(task_ids: list[str], target_id: str) -> str:
    """
    Find the shortest suffix of target_id that uniquely identifies it.

    Args:
        task_ids: List of all task IDs
        target_id: The task ID to find a unique suffix for

    Returns:
        The shortest unique suffix
    """
    for length in range(1, len(target_id) + 1):
        suffix = target_id[-length:]
        matches = [tid for tid in task_ids if tid.endswith(suffix)]
        if len(matches) == 1:
            return suffix
    return target_id


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, str]:
    """Map every task ID to its shortest unique suffix."""
    return {
        task_id: find_shortest_unique_suffix(task_ids, task_id) for task_id in task_ids
    }


def resolve_task_id(tasks: list[Task], task_id_or_suffix: str) -> str:
    """
    Resolve a task ID or suffix to a full task ID.

    Args:
        tasks: Flat list of the user's tasks
        task_id_or_suffix: Full task ID or suffix to resolve

    Returns:
        The full task ID

    Raises:
        TaskNotFoundError: If no task matches
        ValidationFailedError: If the suffix matches several tasks
    """
    task_ids = [task.id for task in tasks]
    if task_id_or_suffix in task_ids:
        return task_id_or_suffix

    matching_tasks = [task for task in tasks if task.id.endswith(task_id_or_suffix)]

    if not matching_tasks:
        raise TaskNotFoundError(task_id_or_suffix)

    if len(matching_tasks) > 1:
        suggestions = []
        for task in matching_tasks:
            unique_suffix = find_shortest_unique_suffix(task_ids, task.id)
            title = task.title
            if len(title) > 70:
                title = title[:67] + "..."
            suggestions.append(f"  [{unique_suffix}] {title}")

        raise ValidationFailedError(
            f"Multiple tasks match suffix '{task_id_or_suffix}':\n"
            + "\n".join(suggestions)
            + "\n\nUse the suffix in brackets to select a specific task."
        )

    return matching_tasks[0].id


async def resolve_task_ref(task_service, task_id_or_suffix: str) -> str:
    """Resolve an ID or suffix against all of the user's tasks."""
    tasks = await task_service.list_tasks(status="all")
    return resolve_task_id(tasks, task_id_or_suffix)
