"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest

from todotree_cli.adapters.sqlite.connection import configure_connection
from todotree_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from todotree_cli.models import Task
from todotree_cli.models.config_models import AppConfig
from todotree_cli.services.notification_service import MemoryNotifier
from todotree_cli.services.task_service import TaskService

# Fixed reference instant used across tests
NOW = datetime(2024, 6, 15, 9, 30)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _drop_log_handlers() -> None:
    pkg_logger = logging.getLogger("todotree_cli")
    for handler in pkg_logger.handlers:
        handler.close()
    pkg_logger.handlers.clear()


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    """Keep the application log out of the real user log directory."""
    from todotree_cli.utils import logger as logger_module

    _drop_log_handlers()
    monkeypatch.setattr(logger_module, "user_log_dir", lambda *_: str(tmp_path / "logs"))
    monkeypatch.setattr(logger_module, "_logger", None)
    yield
    _drop_log_handlers()


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from todotree_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("todotree_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("todotree_cli.services.config_service.user_data_dir", return_value=tmpdir):
            from todotree_cli.services.config_service import ConfigService

            svc = ConfigService()
            yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def mock_config_service():
    """Provide a MagicMock that stands in for get_config_service()."""
    config = AppConfig()
    svc = MagicMock()
    svc.load_config.return_value = config
    svc.config = config
    return svc


@pytest.fixture(autouse=True)
def patch_wrapper_config(mock_config_service, monkeypatch):
    """Default settings for the output options applied by command_wrapper."""
    from todotree_cli.commands import decorators
    from todotree_cli.utils.ui.console import set_color

    monkeypatch.setattr(decorators, "get_config_service", lambda: mock_config_service)
    yield mock_config_service
    set_color(True)


# ---------------------------------------------------------------------------
# Tasks and storage
# ---------------------------------------------------------------------------


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def make_task():
    """Factory building Task objects with sensible defaults."""

    def _make(
        task_id: str,
        *,
        title: str | None = None,
        due: date | None = None,
        weight: int = 3,
        completed: bool = False,
        parent_id: str | None = None,
        order: int = 0,
        subtasks: list[Task] | None = None,
    ) -> Task:
        return Task(
            id=task_id,
            title=title or f"Task {task_id}",
            due_date=due,
            weight=weight,
            completed=completed,
            parent_id=parent_id,
            order=order,
            created_at=NOW,
            updated_at=NOW,
            subtasks=subtasks or [],
        )

    return _make


@pytest.fixture()
def db_connection():
    """In-memory SQLite database with the full migrated schema."""
    conn = configure_connection(sqlite3.connect(":memory:"))
    yield conn
    conn.close()


@pytest.fixture()
def sqlite_repo(db_connection) -> SqliteTaskRepository:
    return SqliteTaskRepository(user_id="user-001", connection=db_connection)


@pytest.fixture()
def notifier() -> MemoryNotifier:
    return MemoryNotifier()


@pytest.fixture()
def task_service(sqlite_repo, notifier) -> TaskService:
    """TaskService over a real in-memory store, recording notifications."""
    return TaskService(sqlite_repo, notifier=notifier)
