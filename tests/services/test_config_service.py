"""Tests for ConfigService."""

import json
from pathlib import Path

import pytest

from todotree_cli.models.config_models import AppConfig


def test_first_load_writes_defaults(tmp_config):
    config = tmp_config.load_config()

    assert config == AppConfig()
    assert tmp_config.config_path.exists()
    saved = json.loads(tmp_config.config_path.read_text())
    assert saved["urgency"]["top_count"] == 5


def test_set_and_get_roundtrip(tmp_config):
    tmp_config.set("urgency.top_count", 10)

    assert tmp_config.get("urgency.top_count") == 10
    saved = json.loads(tmp_config.config_path.read_text())
    assert saved["urgency"]["top_count"] == 10


def test_get_unknown_key_returns_none(tmp_config):
    assert tmp_config.get("urgency.nope") is None
    assert tmp_config.get("urgency.top_count.deeper") is None


def test_set_unknown_key(tmp_config):
    with pytest.raises(KeyError):
        tmp_config.set("urgency.nope", 1)
    with pytest.raises(KeyError):
        tmp_config.set("nope.top_count", 1)


def test_set_invalid_value(tmp_config):
    with pytest.raises(ValueError):
        tmp_config.set("urgency.default_weight", 9)
    assert tmp_config.get("urgency.default_weight") == 3


def test_reset_single_key(tmp_config):
    tmp_config.set("reminders.preview", 7)
    tmp_config.set("output.format", "json")

    tmp_config.reset("reminders.preview")

    assert tmp_config.get("reminders.preview") == 3
    assert tmp_config.get("output.format") == "json"


def test_reset_all(tmp_config):
    tmp_config.set("reminders.enabled", False)
    tmp_config.reset()
    assert tmp_config.config == AppConfig()


def test_corrupt_file(tmp_config):
    tmp_config.config_path.write_text("{not json")
    with pytest.raises(RuntimeError):
        tmp_config.load_config()


def test_db_path_default_and_override(tmp_config, tmp_path):
    assert tmp_config.get_db_path() == Path(tmp_path) / "todotree.db"

    tmp_config.set("storage.db_path", str(tmp_path / "custom.db"))

    assert tmp_config.get_db_path() == tmp_path / "custom.db"
