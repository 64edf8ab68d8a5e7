"""Tests for task ID suffix resolution."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from todotree_cli.exceptions import TaskNotFoundError, ValidationFailedError
from todotree_cli.utils.task_helpers import (
    calculate_unique_suffixes,
    find_shortest_unique_suffix,
    resolve_task_id,
    resolve_task_ref,
)


def test_find_shortest_unique_suffix():
    task_ids = ["abc123", "def456", "ghi123"]
    assert find_shortest_unique_suffix(task_ids, "def456") == "6"
    assert find_shortest_unique_suffix(task_ids, "abc123") == "c123"


def test_calculate_unique_suffixes():
    assert calculate_unique_suffixes(["aa1", "bb2"]) == {"aa1": "1", "bb2": "2"}


def test_resolve_full_id(make_task):
    tasks = [make_task("abc123"), make_task("def456")]
    assert resolve_task_id(tasks, "abc123") == "abc123"


def test_resolve_suffix(make_task):
    tasks = [make_task("abc123"), make_task("def456")]
    assert resolve_task_id(tasks, "456") == "def456"


def test_resolve_unknown(make_task):
    with pytest.raises(TaskNotFoundError) as exc_info:
        resolve_task_id([make_task("abc123")], "zzz")
    assert exc_info.value.task_id == "zzz"


def test_resolve_ambiguous_lists_suggestions(make_task):
    tasks = [make_task("abc123", title="First"), make_task("ghi123", title="Second")]

    with pytest.raises(ValidationFailedError) as exc_info:
        resolve_task_id(tasks, "123")

    message = str(exc_info.value)
    assert "[c123] First" in message
    assert "[i123] Second" in message


async def test_resolve_task_ref_uses_all_tasks(make_task):
    service = MagicMock()
    service.list_tasks = AsyncMock(return_value=[make_task("abc123")])

    assert await resolve_task_ref(service, "23") == "abc123"
    service.list_tasks.assert_awaited_once_with(status="all")
