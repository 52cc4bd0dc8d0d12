"""CLI tests for the config command group."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from focusflow.commands.config import app, parse_value
from focusflow.config import get_config_manager
from focusflow.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND

runner = CliRunner()


def test_view_json() -> None:
    result = runner.invoke(app, ["view"])

    assert result.exit_code == 0
    assert json.loads(result.output)["timer"]["focus_minutes"] == 25


def test_set_and_get() -> None:
    result = runner.invoke(app, ["set", "timer.focus_minutes", "50"])
    assert result.exit_code == 0

    result = runner.invoke(app, ["get", "timer.focus_minutes"])
    assert result.output.strip() == "50"


def test_set_unknown_key() -> None:
    result = runner.invoke(app, ["set", "timer.nap", "5"])

    assert result.exit_code == ERROR_NOT_FOUND


def test_set_invalid_value() -> None:
    result = runner.invoke(app, ["set", "timer.focus_minutes", "0"])

    assert result.exit_code == ERROR_INVALID_ARGS


def test_get_unknown_key() -> None:
    result = runner.invoke(app, ["get", "nothing"])

    assert result.exit_code == ERROR_NOT_FOUND


def test_reset_key_with_yes() -> None:
    get_config_manager().set("timer.focus_minutes", 50)

    result = runner.invoke(app, ["reset", "timer.focus_minutes", "--yes"])

    assert result.exit_code == 0
    assert get_config_manager().get("timer.focus_minutes") == 25


def test_reset_cancelled() -> None:
    get_config_manager().set("timer.focus_minutes", 50)

    result = runner.invoke(app, ["reset"], input="n\n")

    assert result.exit_code == 0
    assert get_config_manager().get("timer.focus_minutes") == 50


def test_parse_value() -> None:
    assert parse_value("true") is True
    assert parse_value("42") == 42
    assert parse_value("none") is None
    assert parse_value("Europe/Berlin") == "Europe/Berlin"
