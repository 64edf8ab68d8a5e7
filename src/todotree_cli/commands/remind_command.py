"""Command 'remind' of todotree"""

import typer

from todotree_cli.services.config_service import get_config_service
from todotree_cli.services.task_service import get_task_service
from todotree_cli.utils.clock import local_now
from todotree_cli.utils.ui.formatters import format_info

from .decorators import command_wrapper

app = typer.Typer()


@app.command("remind")
@command_wrapper
async def remind_command() -> None:
    """Show reminders for tasks due today and tomorrow."""
    settings = get_config_service().config.reminders
    if not settings.enabled:
        format_info("Reminders are disabled (config set reminders.enabled true)")
        return

    reminders = await get_task_service().send_reminders(local_now(), settings.preview)
    if not reminders:
        format_info("Nothing due today or tomorrow.")
