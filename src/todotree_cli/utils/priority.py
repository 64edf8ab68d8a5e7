"""Urgency scoring for tasks.

Every function here is pure: the reference instant ``now`` is always passed in
by the caller, so results never depend on the wall clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from todotree_cli.models import Task, UrgencyLevel
from todotree_cli.utils.hierarchy import flatten_tasks

# Multiplier for tasks due today or overdue. Future scores are bounded by
# MAX_WEIGHT / 1, so anything due now always outranks anything due later.
OVERDUE_MULTIPLIER = 100

# Lower bounds (inclusive) of each urgency tier
CRITICAL_THRESHOLD = 5
HIGH_THRESHOLD = 3
MEDIUM_THRESHOLD = 1

DEFAULT_TOP_COUNT = 5


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_left(task: Task, now: date | datetime) -> int | None:
    """Whole calendar days from ``now`` until the task is due.

    Returns None for tasks without a due date. Negative values mean overdue.
    """
    if task.due_date is None:
        return None
    return (task.due_date - _as_date(now)).days


def calculate_priority(task: Task, now: date | datetime) -> float:
    """Compute the urgency score of a task.

    Args:
        task: Task to score
        now: Reference instant (only its calendar date is used)

    Returns:
        0 for completed or undated tasks, ``weight * 100`` for tasks due today
        or overdue, ``weight / days_left`` otherwise.
    """
    if task.completed or task.due_date is None:
        return 0.0

    remaining = days_left(task, now)
    if remaining <= 0:
        return float(int(task.weight) * OVERDUE_MULTIPLIER)

    return int(task.weight) / remaining


def classify_score(score: float) -> UrgencyLevel:
    """Map a priority score onto its urgency tier."""
    if score >= CRITICAL_THRESHOLD:
        return UrgencyLevel.CRITICAL
    if score >= HIGH_THRESHOLD:
        return UrgencyLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return UrgencyLevel.MEDIUM
    return UrgencyLevel.LOW


def get_urgency_level(task: Task, now: date | datetime) -> UrgencyLevel:
    """Urgency tier of a task at the given instant."""
    return classify_score(calculate_priority(task, now))


def sort_by_priority(tasks: Iterable[Task], now: date | datetime) -> list[Task]:
    """Return tasks ordered by descending priority.

    The sort is stable: tasks with equal scores keep their input order.
    """
    return sorted(tasks, key=lambda task: -calculate_priority(task, now))


def get_top_urgent_tasks(
    tasks: Iterable[Task],
    now: date | datetime,
    count: int = DEFAULT_TOP_COUNT,
) -> list[Task]:
    """Most urgent incomplete tasks of a forest, subtasks included.

    Args:
        tasks: Root tasks (or any forest); nested subtasks are considered too
        now: Reference instant
        count: Maximum number of tasks to return

    Returns:
        At most ``count`` incomplete tasks, most urgent first
    """
    if count <= 0:
        return []
    incomplete = [task for task in flatten_tasks(tasks) if not task.completed]
    return sort_by_priority(incomplete, now)[:count]
