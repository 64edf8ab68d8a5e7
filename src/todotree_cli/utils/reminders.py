"""Due-date reminders for today and tomorrow."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from todotree_cli.models import Notification, Task
from todotree_cli.utils.hierarchy import flatten_tasks

DEFAULT_PREVIEW = 3
TODAY_DURATION_MS = 5000
TOMORROW_DURATION_MS = 4000


def tasks_due_on(tasks: Iterable[Task], day: date) -> list[Task]:
    """Incomplete tasks of a forest (subtasks included) due on ``day``."""
    return [
        task
        for task in flatten_tasks(tasks)
        if not task.completed and task.due_date == day
    ]


def _pluralize(count: int) -> str:
    return f"{count} task{'s' if count > 1 else ''}"


def _preview_titles(tasks: list[Task], preview: int) -> str:
    titles = ", ".join(task.title for task in tasks[:preview])
    if len(tasks) > preview:
        titles += f" and {len(tasks) - preview} more"
    return titles


def build_due_reminders(
    tasks: Iterable[Task],
    now: date | datetime,
    preview: int = DEFAULT_PREVIEW,
) -> list[Notification]:
    """Reminders for tasks due today and tomorrow.

    Args:
        tasks: Task forest
        now: Reference instant
        preview: Number of task titles to name in each reminder

    Returns:
        Zero, one or two notifications (today first)
    """
    today = now.date() if isinstance(now, datetime) else now
    forest = list(tasks)

    reminders = []
    due_today = tasks_due_on(forest, today)
    if due_today:
        reminders.append(
            Notification(
                title=f"{_pluralize(len(due_today))} due today!",
                description=_preview_titles(due_today, preview),
                variant="warning",
                duration_ms=TODAY_DURATION_MS,
            )
        )

    due_tomorrow = tasks_due_on(forest, today + timedelta(days=1))
    if due_tomorrow:
        reminders.append(
            Notification(
                title=f"{_pluralize(len(due_tomorrow))} due tomorrow",
                description=_preview_titles(due_tomorrow, preview),
                variant="info",
                duration_ms=TOMORROW_DURATION_MS,
            )
        )

    return reminders
