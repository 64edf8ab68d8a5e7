"""CLI tests for the config sub-commands."""

import pytest
from typer.testing import CliRunner

from todotree_cli.commands import config_command
from todotree_cli.main import app
from todotree_cli.utils import exit_codes

runner = CliRunner()


@pytest.fixture()
def config_svc(tmp_config, monkeypatch):
    monkeypatch.setattr(config_command, "get_config_service", lambda: tmp_config)
    return tmp_config


def test_view_yaml(config_svc):
    result = runner.invoke(app, ["config", "view"])

    assert result.exit_code == 0, result.output
    assert "top_count: 5" in result.output


def test_get(config_svc):
    result = runner.invoke(app, ["config", "get", "reminders.preview"])
    assert result.exit_code == 0
    assert "3" in result.output


def test_get_unknown(config_svc):
    result = runner.invoke(app, ["config", "get", "nope.key"])
    assert result.exit_code == exit_codes.ERROR_NOT_FOUND


def test_set_parses_int_and_bool(config_svc):
    assert runner.invoke(app, ["config", "set", "urgency.top_count", "8"]).exit_code == 0
    assert runner.invoke(app, ["config", "set", "reminders.enabled", "false"]).exit_code == 0

    assert config_svc.get("urgency.top_count") == 8
    assert config_svc.get("reminders.enabled") is False


def test_set_invalid_value(config_svc):
    result = runner.invoke(app, ["config", "set", "urgency.default_weight", "7"])
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS


def test_set_unknown_key(config_svc):
    result = runner.invoke(app, ["config", "set", "urgency.colour", "red"])
    assert result.exit_code == exit_codes.ERROR_NOT_FOUND


def test_reset_key(config_svc):
    config_svc.set("urgency.top_count", 9)

    result = runner.invoke(app, ["config", "reset", "urgency.top_count", "--yes"])

    assert result.exit_code == 0, result.output
    assert config_svc.get("urgency.top_count") == 5


def test_set_text_setting_keeps_digits(config_svc):
    result = runner.invoke(app, ["config", "set", "storage.user_id", "12345"])

    assert result.exit_code == 0, result.output
    assert config_svc.get("storage.user_id") == "12345"


def test_get_prints_brackets_literally(config_svc):
    config_svc.set("storage.user_id", "[bold]me")

    result = runner.invoke(app, ["config", "get", "storage.user_id"])

    assert result.exit_code == 0, result.output
    assert "[bold]me" in result.output
