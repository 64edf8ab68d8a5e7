"""Command 'delete' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.task_helpers import resolve_task_ref
from todotree_cli.utils.ui.console import get_console

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("delete")
@command_wrapper
async def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
) -> None:
    """Delete a task and all of its subtasks."""
    task_service = get_task_service()
    resolved_id = await resolve_task_ref(task_service, task_id)

    if not yes:
        task = await task_service.get_task(resolved_id)
        if not typer.confirm(f'Delete "{task.title}" and all its subtasks?'):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    removed = await task_service.delete_task(resolved_id)
    console.print(f"[dim]{len(removed)} task(s) removed[/dim]")
