"""Month calendar helpers."""

from __future__ import annotations

import calendar
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from todotree_cli.models import Task
from todotree_cli.utils.hierarchy import flatten_tasks

# Weeks start on Sunday
FIRST_WEEKDAY = calendar.SUNDAY


def month_grid(year: int, month: int) -> list[list[date | None]]:
    """Weeks of a month, with days outside the month set to None."""
    cal = calendar.Calendar(firstweekday=FIRST_WEEKDAY)
    return [
        [day if day.month == month else None for day in week]
        for week in cal.monthdatescalendar(year, month)
    ]


def tasks_by_day(tasks: Iterable[Task], year: int, month: int) -> dict[date, list[Task]]:
    """Incomplete tasks of a forest grouped by their due day within a month."""
    grouped: dict[date, list[Task]] = defaultdict(list)
    for task in flatten_tasks(tasks):
        if task.completed or task.due_date is None:
            continue
        if task.due_date.year == year and task.due_date.month == month:
            grouped[task.due_date].append(task)
    return dict(grouped)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or back) from year/month."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
