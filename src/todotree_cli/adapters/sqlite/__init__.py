"""SQLite adapter module - Local database storage implementation."""

from todotree_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from todotree_cli.adapters.sqlite.user_manager import (
    get_or_create_local_user,
    get_system_timezone,
)

__all__ = [
    "SqliteTaskRepository",
    "get_or_create_local_user",
    "get_system_timezone",
]
