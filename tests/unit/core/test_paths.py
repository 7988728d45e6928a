"""Unit tests for XDG path management."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from setupctl.core.paths import (
    APP_NAME,
    ensure_config_dir,
    ensure_state_dir,
    get_config_dir,
    get_last_run_path,
    get_settings_path,
    get_state_dir,
    get_user_registry_path,
    get_user_theme_path,
)


class TestXdgDirs:
    """Tests for get_config_dir and get_state_dir functions."""

    def test_default_config_dir(self) -> None:
        """get_config_dir falls back to ~/.config."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_dir() == tmp_path / APP_NAME

    def test_default_state_dir(self) -> None:
        """get_state_dir falls back to ~/.local/state."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_state_dir()

        assert result == Path.home() / ".local" / "state" / APP_NAME

    def test_empty_variable_is_ignored(self) -> None:
        """An empty XDG variable means the default."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": ""}):
            assert get_state_dir() == Path.home() / ".local" / "state" / APP_NAME


class TestFilePaths:
    """Tests for the file path helpers."""

    @pytest.fixture(autouse=True)
    def _xdg(self, tmp_path: Path):
        with patch.dict(
            os.environ,
            {
                "XDG_CONFIG_HOME": str(tmp_path / "config"),
                "XDG_STATE_HOME": str(tmp_path / "state"),
            },
        ):
            yield

    def test_config_files(self, tmp_path: Path) -> None:
        """Settings, registry and theme live in the config dir."""
        config = tmp_path / "config" / APP_NAME
        assert get_settings_path() == config / "settings.toml"
        assert get_user_registry_path() == config / "tools.toml"
        assert get_user_theme_path() == config / "theme.toml"

    def test_last_run_in_state_dir(self, tmp_path: Path) -> None:
        """The last run report lives in the state dir."""
        assert get_last_run_path() == tmp_path / "state" / APP_NAME / "last-run.json"

    def test_ensure_dirs(self, tmp_path: Path) -> None:
        """ensure_* create the directories and are idempotent."""
        assert ensure_config_dir() == ensure_config_dir()
        assert (tmp_path / "config" / APP_NAME).is_dir()
        assert ensure_state_dir().is_dir()

    def test_ensure_dir_failure(self, tmp_path: Path) -> None:
        """A file in the way is reported as RuntimeError."""
        (tmp_path / "config").write_text("")
        with pytest.raises(RuntimeError, match="Cannot create config directory"):
            ensure_config_dir()
