"""Command 'list' of todotree"""

from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.clock import local_now
from todotree_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todotree_cli.utils.hierarchy import flatten_tasks, sort_siblings
from todotree_cli.utils.priority import sort_by_priority
from todotree_cli.utils.ui.formatters import (
    format_output,
    format_task_list,
    format_task_tree,
)

from .decorators import AppError, command_wrapper, resolve_output_format

app = typer.Typer()


@app.command("list")
@command_wrapper
async def list_command(
    status: Annotated[
        str, typer.Option("--status", "-s", help="active, completed or all")
    ] = "active",
    flat: Annotated[
        bool, typer.Option("--flat", help="Show a flat list instead of a tree")
    ] = False,
    by_priority: Annotated[
        bool, typer.Option("--by-priority", help="Flat list, most urgent first")
    ] = False,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (default: output.format)"),
    ] = None,
) -> None:
    """List tasks as a tree (default) or a flat list."""
    output = resolve_output_format(output)
    if status not in ("active", "completed", "all"):
        raise AppError("status must be active, completed or all", ERROR_INVALID_ARGS)

    now = local_now()
    task_service = get_task_service()
    tree = sort_siblings(await task_service.get_task_tree(status=status))
    all_ids = [task.id for task in flatten_tasks(tree)]

    if by_priority:
        tasks = sort_by_priority(flatten_tasks(tree), now)
    elif flat:
        tasks = flatten_tasks(tree)
    else:
        tasks = None

    if output in ("json", "yaml"):
        if tasks is None:
            data = [task.model_dump(mode="json") for task in tree]
        else:
            data = [task.model_dump(mode="json", exclude={"subtasks"}) for task in tasks]
        format_output(data, output)
    elif tasks is None:
        format_task_tree(tree, now, all_task_ids=all_ids)
    else:
        format_task_list(tasks, now, all_task_ids=all_ids)
