"""Database connection management for the local SQLite task store.

This module provides a singleton connection manager, ensuring proper
connection lifecycle, WAL mode, and foreign key enforcement.
"""

from __future__ import annotations

import atexit
import logging
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todotree_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "todotree.db"


def default_db_path() -> Path:
    """Location of the task store when none is configured."""
    return Path(user_data_dir("todotree_cli")) / DEFAULT_DB_NAME


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    """Apply row factory and pragmas, then bring the schema up to date."""
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection


class DatabaseConnection:
    """Singleton connection manager for the local task store.

    Provides:
    - Single connection per process (connection reuse)
    - WAL mode for better concurrency
    - Foreign key constraint enforcement (cascading subtree deletes)
    - Automatic directory creation
    - Owner-only file permissions
    - Graceful cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection configured for todotree usage
        """
        instance = cls()
        db_path = Path(db_path) if db_path is not None else default_db_path()

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        if instance._connection is not None:
            instance._connection.close()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        connection = sqlite3.connect(str(db_path), timeout=30.0)
        connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(db_path, 0o600)
            logger.info("Created task store at %s", db_path)

        configure_connection(connection)

        instance._connection = connection
        instance._db_path = db_path

        atexit.register(cls.close_connection)

        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection, committing pending work."""
        instance = cls()
        if instance._connection is None:
            return
        try:
            instance._connection.commit()
            instance._connection.close()
        except sqlite3.Error:
            logger.exception("Failed to close task store cleanly")
        finally:
            instance._connection = None
            instance._db_path = None


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
