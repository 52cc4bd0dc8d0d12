"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path):
    """Keep logs, config, state and databases inside *tmp_path*."""
    tmpdir = str(tmp_path / "appdirs")
    with patch("focusflow.utils.logger.user_log_dir", return_value=tmpdir), patch(
        "focusflow.utils.logger._logger", None
    ), patch("focusflow.config.user_config_dir", return_value=tmpdir), patch(
        "focusflow.config._config_manager", None
    ), patch(
        "focusflow.adapters.sqlite.connection.user_data_dir", return_value=tmpdir
    ), patch("platformdirs.user_data_dir", return_value=tmpdir):
        yield tmp_path
