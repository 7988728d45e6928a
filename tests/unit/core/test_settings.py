"""Unit tests for runtime settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError
from setupctl.core.settings import (
    Settings,
    SettingsError,
    SettingsParseError,
    load_settings,
    save_settings,
)


class TestSettings:
    """Tests for Settings model."""

    def test_defaults(self) -> None:
        """Defaults match the documented behavior."""
        settings = Settings()
        assert settings.use_sudo is True
        assert settings.refresh_index is True
        assert settings.retry_attempts == 3
        assert settings.retry_delay_seconds == 2.0
        assert settings.probe_timeout_seconds == 30

    @pytest.mark.parametrize(
        "field",
        [
            {"retry_attempts": 0},
            {"retry_attempts": 11},
            {"retry_delay_seconds": -1},
            {"probe_timeout_seconds": 0},
        ],
    )
    def test_bounds(self, field: dict[str, float]) -> None:
        """Out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            Settings.model_validate(field)

    def test_unknown_key(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            Settings.model_validate({"parallel": True})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing file means defaults."""
        assert load_settings(tmp_path / "settings.toml") == Settings()

    def test_partial_file(self, tmp_path: Path) -> None:
        """Keys not in the file keep their defaults."""
        path = tmp_path / "settings.toml"
        path.write_text("use_sudo = false\nretry_attempts = 5\n")

        settings = load_settings(path)

        assert settings.use_sudo is False
        assert settings.retry_attempts == 5
        assert settings.refresh_index is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken syntax raises SettingsParseError."""
        path = tmp_path / "settings.toml"
        path.write_text("use_sudo = \n")
        with pytest.raises(SettingsParseError):
            load_settings(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise SettingsError."""
        path = tmp_path / "settings.toml"
        path.write_text("retry_attempts = 50\n")
        with pytest.raises(SettingsError, match="Invalid settings content"):
            load_settings(path)


class TestSaveSettings:
    """Tests for save_settings function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved settings load back unchanged."""
        settings = Settings(use_sudo=False, probe_timeout_seconds=5)

        path = save_settings(settings, tmp_path / "cfg" / "settings.toml")

        assert load_settings(path) == settings
        assert not list(path.parent.glob("*.tmp"))

    def test_unwritable_parent(self, tmp_path: Path) -> None:
        """A parent that cannot be created raises SettingsError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(SettingsError, match="Failed to write settings"):
            save_settings(Settings(), blocker / "setupctl" / "settings.toml")
