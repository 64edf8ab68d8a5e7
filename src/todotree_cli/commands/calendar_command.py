"""Command 'calendar' of todotree"""

from datetime import datetime
from typing import Annotated

import typer

from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.calendar_view import shift_month, tasks_by_day
from todotree_cli.utils.clock import local_now
from todotree_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todotree_cli.utils.ui.formatters import format_calendar, format_output

from .decorators import AppError, command_wrapper, resolve_output_format

app = typer.Typer()


@app.command("calendar")
@command_wrapper
async def calendar_command(
    month: Annotated[
        str | None, typer.Option("--month", "-m", help="Month to show (YYYY-MM)")
    ] = None,
    offset: Annotated[
        int, typer.Option("--offset", help="Months to move from --month (e.g. -1)")
    ] = 0,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (default: output.format)"),
    ] = None,
) -> None:
    """Show open tasks on a month calendar."""
    output = resolve_output_format(output)
    now = local_now()
    if month is None:
        year, month_number = now.year, now.month
    else:
        try:
            parsed = datetime.strptime(month, "%Y-%m")
        except ValueError as e:
            raise AppError(f"Invalid month: {month} (expected YYYY-MM)", ERROR_INVALID_ARGS) from e
        year, month_number = parsed.year, parsed.month
    year, month_number = shift_month(year, month_number, offset)

    tree = await get_task_service().get_task_tree(status="active")

    if output in ("json", "yaml"):
        by_day = tasks_by_day(tree, year, month_number)
        format_output(
            {
                day.isoformat(): [task.title for task in tasks]
                for day, tasks in sorted(by_day.items())
            },
            output,
        )
        return

    format_calendar(tree, year, month_number, now)
