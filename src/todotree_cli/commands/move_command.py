"""Command 'move' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.task_helpers import resolve_task_ref
from todotree_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("move")
@command_wrapper
async def move_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    position: Annotated[
        int, typer.Argument(help="New position among its siblings (1 = first)")
    ],
) -> None:
    """Reorder a task within its sibling group."""
    task_service = get_task_service()
    resolved_id = await resolve_task_ref(task_service, task_id)
    ordered = await task_service.move_task(resolved_id, position - 1)
    format_success(f"Moved to position {ordered.index(resolved_id) + 1} of {len(ordered)}")
