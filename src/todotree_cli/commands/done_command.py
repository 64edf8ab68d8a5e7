"""Command 'done' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.task_helpers import resolve_task_ref
from todotree_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("done")
@command_wrapper
async def done_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
) -> None:
    """Toggle a task between open and completed."""
    task_service = get_task_service()
    resolved_id = await resolve_task_ref(task_service, task_id)
    task = await task_service.toggle_complete(resolved_id)

    title = task.title
    if len(title) > 60:
        title = title[:57] + "..."

    if task.completed:
        format_success(f"✓ Completed: {title}")
    else:
        format_success(f"Reopened: {title}")
