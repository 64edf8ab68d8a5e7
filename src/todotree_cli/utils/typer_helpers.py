"""Typer group used by the todotree root app and its sub-apps."""

from difflib import get_close_matches

import typer
from rich.markup import escape
from typer.core import TyperGroup

from todotree_cli.utils.ui.console import get_console

# Close-match settings for mistyped command names
_MAX_SUGGESTIONS = 3
_SIMILARITY_CUTOFF = 0.6


class SuggestingGroup(TyperGroup):
    """Command group that answers an unknown command with the closest names.

    ``todotree urgnet`` prints "Did you mean this? urgent" and exits 1
    instead of click's bare usage error. Without a close match the usual
    error is raised.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            typed = args[0]
            matches = get_close_matches(
                typed, list(self.commands), n=_MAX_SUGGESTIONS, cutoff=_SIMILARITY_CUTOFF
            )
            if not matches:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] "{escape(typed)}" is not a {ctx.info_name} command'
            )
            console.print()
            heading = "Did you mean this?" if len(matches) == 1 else "Did you mean one of these?"
            console.print(f"[yellow]{heading}[/yellow]")
            for name in matches:
                console.print(f"  {ctx.info_name} {name}")
            raise typer.Exit(1) from e
