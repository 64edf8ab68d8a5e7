"""Command 'edit' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.clock import parse_date
from todotree_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todotree_cli.utils.task_helpers import resolve_task_ref
from todotree_cli.utils.ui.formatters import format_output

from .decorators import AppError, command_wrapper, resolve_output_format

app = typer.Typer()


@app.command("edit")
@command_wrapper
async def edit_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="New description")
    ] = None,
    due: Annotated[
        str | None,
        typer.Option("--due", help="New due date (today/tomorrow/+N/YYYY-MM-DD)"),
    ] = None,
    clear_due: Annotated[
        bool, typer.Option("--clear-due", help="Remove the due date")
    ] = False,
    weight: Annotated[
        int | None,
        typer.Option("--weight", "-w", min=1, max=5, help="Importance 1-5"),
    ] = None,
    parent: Annotated[
        str | None, typer.Option("--parent", "-p", help="Move under this task")
    ] = None,
    root: Annotated[
        bool, typer.Option("--root", help="Detach from the parent task")
    ] = False,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (default: output.format)"),
    ] = None,
) -> None:
    """Edit a task's fields or move it in the tree."""
    output = resolve_output_format(output)
    if due is not None and clear_due:
        raise AppError("Use either --due or --clear-due, not both", ERROR_INVALID_ARGS)
    if parent is not None and root:
        raise AppError("Use either --parent or --root, not both", ERROR_INVALID_ARGS)

    due_date = None
    if due is not None:
        try:
            due_date = parse_date(due)
        except ValueError as e:
            raise AppError(f"Invalid due date: {due}", ERROR_INVALID_ARGS) from e

    task_service = get_task_service()
    resolved_id = await resolve_task_ref(task_service, task_id)
    parent_id = await resolve_task_ref(task_service, parent) if parent else None

    task = await task_service.update_task(
        resolved_id,
        title=title,
        description=description,
        due_date=due_date,
        clear_due_date=clear_due,
        weight=weight,
        parent_id=parent_id,
        make_root=root,
    )

    if output not in ("pretty", "table"):
        format_output(task.model_dump(mode="json", exclude={"subtasks"}), output)
