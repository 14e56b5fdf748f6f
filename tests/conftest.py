"""Pytest configuration and fixtures for all tests."""

from pathlib import Path

import pytest

from cpswitch.config.paths import PathsOptions


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path, monkeypatch):
    """Keep the real ~/.claude and ~/.config out of every test."""
    for key in (
        "CPS_CONFIG_PATH",
        "CPS_CONFIG_DIR",
        "CPS_BACKUP_DIR",
        "CPS_CLAUDE_SETTINGS_PATH",
        "CPS_CLAUDE_DIR",
        "CPS_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def paths_options(tmp_path) -> PathsOptions:
    return PathsOptions(
        config_path=tmp_path / "config" / "config.json",
        claude_settings_path=tmp_path / "claude" / "settings.json",
    )


@pytest.fixture
def settings_path(paths_options) -> Path:
    return paths_options.claude_settings_path


@pytest.fixture
def backup_dir(tmp_path) -> Path:
    return tmp_path / "config" / "backups"
