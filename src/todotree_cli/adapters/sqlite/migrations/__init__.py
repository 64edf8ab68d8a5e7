"""Forward-only schema migrations for the SQLite task store."""

from .m001_initial_schema import initial_migration
from .runner import Migration, MigrationRunner, get_current_version

ALL_MIGRATIONS = [initial_migration]

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationRunner",
    "get_current_version",
]
