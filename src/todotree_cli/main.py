"""Main entry point for todotree."""

import typer
from rich.markup import escape

from todotree_cli import __version__
from todotree_cli.commands import (
    add_command,
    calendar_command,
    config_command,
    delete_command,
    done_command,
    edit_command,
    list_command,
    move_command,
    remind_command,
    show_command,
    urgent_command,
)
from todotree_cli.utils.logger import log_file_path
from todotree_cli.utils.typer_helpers import SuggestingGroup
from todotree_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="todotree",
    cls=SuggestingGroup,
    help="A personal task manager with subtasks and urgency ranking",
    no_args_is_help=True,
)

console = get_console()

# Add top-level task commands
app.command("add")(add_command.add_command)
app.command("list")(list_command.list_command)
app.command("show")(show_command.show_command)
app.command("edit")(edit_command.edit_command)
app.command("done")(done_command.done_command)
app.command("delete")(delete_command.delete_command)
app.command("move")(move_command.move_command)
app.command("urgent")(urgent_command.urgent_command)
app.command("calendar")(calendar_command.calendar_command)
app.command("remind")(remind_command.remind_command)

# Add subcommands
app.add_typer(config_command.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information and where the log file is."""
    console.print(f"[bold]todotree[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Log file: {escape(str(log_file_path()))}[/dim]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
