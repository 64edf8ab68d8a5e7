"""Command 'urgent' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.config_service import get_config_service
from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.clock import local_now
from todotree_cli.utils.priority import calculate_priority, get_urgency_level
from todotree_cli.utils.ui.formatters import format_output, format_urgent_panel

from .decorators import command_wrapper, resolve_output_format

app = typer.Typer()


@app.command("urgent")
@command_wrapper
async def urgent_command(
    count: Annotated[
        int | None,
        typer.Option("--count", "-n", min=1, help="Number of tasks to show"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (default: output.format)"),
    ] = None,
) -> None:
    """Show the most urgent open tasks, subtasks included."""
    output = resolve_output_format(output)
    if count is None:
        count = get_config_service().config.urgency.top_count

    now = local_now()
    tasks = await get_task_service().get_urgent_tasks(now, count)

    if output in ("json", "yaml"):
        format_output(
            [
                {
                    **task.model_dump(mode="json", exclude={"subtasks"}),
                    "priority": calculate_priority(task, now),
                    "urgency": get_urgency_level(task, now).value,
                }
                for task in tasks
            ],
            output,
        )
        return

    format_urgent_panel(tasks, now, count)
