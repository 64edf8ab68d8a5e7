"""Command 'add' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.clock import parse_date
from todotree_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todotree_cli.utils.task_helpers import resolve_task_ref
from todotree_cli.utils.ui.formatters import format_output

from .decorators import AppError, command_wrapper, resolve_output_format

app = typer.Typer()


@app.command("add")
@command_wrapper
async def add_command(
    title: Annotated[str, typer.Argument(help="Task title")],
    description: Annotated[
        str, typer.Option("--description", "-d", help="Task description")
    ] = "",
    due: Annotated[
        str | None,
        typer.Option("--due", help="Due date (today/tomorrow/+N/YYYY-MM-DD)"),
    ] = None,
    weight: Annotated[
        int | None,
        typer.Option("--weight", "-w", min=1, max=5, help="Importance 1-5"),
    ] = None,
    parent: Annotated[
        str | None, typer.Option("--parent", "-p", help="Parent task ID or suffix")
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (default: output.format)"),
    ] = None,
) -> None:
    """Create a task. Subtasks inherit the parent's due date and weight."""
    output = resolve_output_format(output)
    due_date = None
    if due is not None:
        try:
            due_date = parse_date(due)
        except ValueError as e:
            raise AppError(f"Invalid due date: {due}", ERROR_INVALID_ARGS) from e

    task_service = get_task_service()
    parent_id = await resolve_task_ref(task_service, parent) if parent else None

    task = await task_service.add_task(
        title,
        description=description,
        due_date=due_date,
        weight=weight,
        parent_id=parent_id,
    )

    if output not in ("pretty", "table"):
        format_output(task.model_dump(mode="json", exclude={"subtasks"}), output)
