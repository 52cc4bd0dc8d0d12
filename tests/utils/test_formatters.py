"""Tests for the output formatters."""

from __future__ import annotations

import json

import pytest

from focusflow.utils.exit_codes import ERROR_NOT_FOUND, get_exit_code_name
from focusflow.utils.ui.formatters import (
    format_duration,
    format_output,
    render_progress_bar,
)


@pytest.mark.parametrize(
    ("minutes", "expected"), [(0, "0m"), (45, "45m"), (60, "1h 0m"), (135, "2h 15m")]
)
def test_format_duration(minutes: int, expected: str) -> None:
    assert format_duration(minutes) == expected


def test_render_progress_bar() -> None:
    assert render_progress_bar(5, 10, width=4) == "██░░"
    assert render_progress_bar(20, 10, width=4) == "████"
    assert render_progress_bar(3, 0, width=4) == "░░░░"


def test_format_output_json(capsys) -> None:
    format_output({"current_streak": 3}, "json")

    assert json.loads(capsys.readouterr().out) == {"current_streak": 3}


def test_exit_code_names() -> None:
    assert get_exit_code_name(ERROR_NOT_FOUND) == "ERROR_NOT_FOUND"
    assert get_exit_code_name(42) == "UNKNOWN(42)"
