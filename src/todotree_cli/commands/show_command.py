"""Command 'show' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.clock import local_now
from todotree_cli.utils.hierarchy import find_task
from todotree_cli.utils.priority import calculate_priority, days_left, get_urgency_level
from todotree_cli.utils.task_helpers import resolve_task_ref
from todotree_cli.utils.ui.formatters import format_output, format_task_tree

from .decorators import command_wrapper, resolve_output_format

app = typer.Typer()


@app.command("show")
@command_wrapper
async def show_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (default: output.format)"),
    ] = None,
) -> None:
    """Show a task with its urgency score and subtasks."""
    output = resolve_output_format(output)
    now = local_now()
    task_service = get_task_service()
    resolved_id = await resolve_task_ref(task_service, task_id)
    task = find_task(await task_service.get_task_tree(), resolved_id)

    details = task.model_dump(mode="json", exclude={"subtasks"})
    details["days_left"] = days_left(task, now)
    details["priority"] = round(calculate_priority(task, now), 3)
    details["urgency"] = get_urgency_level(task, now).value
    details["subtasks"] = len(task.subtasks)
    format_output(details, output)

    if task.subtasks and output in ("table", "pretty"):
        format_task_tree(task.subtasks, now)
