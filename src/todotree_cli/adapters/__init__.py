"""Storage adapters implementing the repository ports."""

from todotree_cli.adapters.sqlite import SqliteTaskRepository

__all__ = ["SqliteTaskRepository"]
