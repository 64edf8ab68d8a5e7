"""Tests for reference-time helpers."""

from datetime import date, datetime

import pytest

from todotree_cli.utils.clock import local_now, parse_date

NOW = datetime(2024, 6, 15, 9, 30)


def test_local_now_is_timezone_aware():
    assert local_now().tzinfo is not None


@pytest.mark.parametrize(
    "value,expected",
    [
        ("today", date(2024, 6, 15)),
        ("Tomorrow", date(2024, 6, 16)),
        ("+0", date(2024, 6, 15)),
        ("+10", date(2024, 6, 25)),
        ("2024-12-31", date(2024, 12, 31)),
        (" 2025-01-02 ", date(2025, 1, 2)),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value, NOW) == expected


@pytest.mark.parametrize("value", ["", "next week", "+x", "2024-13-01", "-3"])
def test_parse_date_invalid(value):
    with pytest.raises(ValueError):
        parse_date(value, NOW)
