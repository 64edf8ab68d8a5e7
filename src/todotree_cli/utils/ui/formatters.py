"""Output formatters for different formats."""

import json
from datetime import date, datetime
from typing import Any

import yaml
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from todotree_cli.models import Notification, Task, UrgencyLevel
from todotree_cli.utils.calendar_view import month_grid, tasks_by_day
from todotree_cli.utils.priority import calculate_priority, get_urgency_level
from todotree_cli.utils.task_helpers import calculate_unique_suffixes
from todotree_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display plain data (dicts/lists) based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(Text(str(item)))
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(Text(str(data)))


def _cell(value: Any) -> str:
    """Table cell text; user text is escaped so brackets print as typed."""
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return escape(", ".join(str(v) for v in value))
    if value is None:
        return "-"
    return escape(str(value))


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


# ============================================================================
# Task Rendering
# ============================================================================

URGENCY_ICONS = {
    UrgencyLevel.CRITICAL: "🔴",
    UrgencyLevel.HIGH: "🟠",
    UrgencyLevel.MEDIUM: "🟡",
    UrgencyLevel.LOW: "🟢",
}

URGENCY_COLORS = {
    UrgencyLevel.CRITICAL: "bold red",
    UrgencyLevel.HIGH: "bold orange3",
    UrgencyLevel.MEDIUM: "bold yellow",
    UrgencyLevel.LOW: "green",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}

NOTIFICATION_STYLES = {
    "success": "green",
    "info": "blue",
    "warning": "yellow",
    "error": "red",
}


def format_due_date(due: date, now: date | datetime) -> str:
    """Format a due date relative to ``now`` (e.g. "today", "in 3d")."""
    today = now.date() if isinstance(now, datetime) else now
    delta = (due - today).days
    if delta == 0:
        return "today"
    if delta == 1:
        return "tomorrow"
    if delta == -1:
        return "yesterday"
    if delta < 0:
        return f"{-delta}d overdue"
    if delta < 7:
        return f"in {delta}d"
    if due.year != today.year:
        return due.strftime("%d %b %Y")
    return due.strftime("%d %b")


def task_label(task: Task, now: date | datetime, suffix: str | None = None) -> Text:
    """One-line rich rendering of a task."""
    level = get_urgency_level(task, now)
    icon = STATUS_ICONS["completed"] if task.completed else STATUS_ICONS["open"]

    line = Text()
    line.append(f"{icon} ")
    line.append(task.title, style="dim" if task.completed else URGENCY_COLORS[level])
    line.append(f"  w{int(task.weight)}", style="magenta")
    if task.due_date:
        due_style = "dim" if task.completed else "cyan"
        if not task.completed and task.due_date < (
            now.date() if isinstance(now, datetime) else now
        ):
            due_style = "bold red"
        line.append(f" • {format_due_date(task.due_date, now)}", style=due_style)
    line.append(f" #{suffix or task.id[-6:]}", style="dim")
    return line


def format_task_tree(
    roots: list[Task],
    now: date | datetime,
    all_task_ids: list[str] | None = None,
) -> None:
    """Render a task forest as a tree."""
    if not roots:
        console.print("[yellow]No tasks found[/yellow]")
        return

    suffixes = calculate_unique_suffixes(all_task_ids or [])
    tree = Tree(Text("📋 Tasks", style="bold cyan"), guide_style="dim")

    def _add(branch: Tree, tasks: list[Task]) -> None:
        for task in tasks:
            node = branch.add(task_label(task, now, suffixes.get(task.id)))
            _add(node, task.subtasks)

    _add(tree, roots)
    console.print(tree)


def format_task_list(
    tasks: list[Task],
    now: date | datetime,
    all_task_ids: list[str] | None = None,
) -> None:
    """Render a flat task sequence, one line per task."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return
    suffixes = calculate_unique_suffixes(all_task_ids or [])
    for task in tasks:
        console.print(task_label(task, now, suffixes.get(task.id)))


def format_urgent_panel(tasks: list[Task], now: date | datetime, count: int) -> None:
    """Render the most urgent tasks in a panel."""
    if not tasks:
        console.print(
            Panel(
                "[green]All caught up! No urgent tasks.[/green]",
                border_style="green",
            )
        )
        return

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("#", justify="right")
    table.add_column("Task")
    table.add_column("Due")
    table.add_column("Weight", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Level")

    for index, task in enumerate(tasks, start=1):
        level = get_urgency_level(task, now)
        table.add_row(
            str(index),
            Text(task.title, style=URGENCY_COLORS[level]),
            format_due_date(task.due_date, now) if task.due_date else "-",
            str(int(task.weight)),
            f"{calculate_priority(task, now):.2f}",
            f"{URGENCY_ICONS[level]} {level.value}",
        )

    console.print(
        Panel(table, title=f"⚠️  Top {count} Urgent Tasks", border_style="red")
    )


def format_calendar(
    tasks: list[Task], year: int, month: int, now: date | datetime
) -> None:
    """Render a month grid with task titles on their due day."""
    today = now.date() if isinstance(now, datetime) else now
    by_day = tasks_by_day(tasks, year, month)

    table = Table(
        title=date(year, month, 1).strftime("%B %Y"),
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
        table.add_column(name, width=14, overflow="fold")

    for week in month_grid(year, month):
        cells = []
        for day in week:
            if day is None:
                cells.append(Text(""))
                continue
            cell = Text(str(day.day), style="bold reverse" if day == today else "bold")
            for task in by_day.get(day, [])[:3]:
                level = get_urgency_level(task, now)
                cell.append(f"\n{task.title}", style=URGENCY_COLORS[level])
            extra = len(by_day.get(day, [])) - 3
            if extra > 0:
                cell.append(f"\n+{extra} more", style="dim")
            cells.append(cell)
        table.add_row(*cells)

    console.print(table)


def format_notification(notification: Notification) -> None:
    """Render a transient notification."""
    style = NOTIFICATION_STYLES[notification.variant]
    text = Text(notification.title, style=f"bold {style}")
    if notification.description:
        text.append(f"\n{notification.description}", style="dim")
    console.print(Panel(text, border_style=style, expand=False))
