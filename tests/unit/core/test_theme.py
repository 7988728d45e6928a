"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
import setupctl.core.theme as theme_module
from rich.theme import Theme
from setupctl.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
)


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.header == "#69B9A1"
        assert colors.status_failed == "#f53263"

    def test_short_hex(self) -> None:
        """#RGB colors are accepted."""
        assert ThemeColors(muted="#abc").muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(status_installed="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(priority_high="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nwidth = 3\n')

        assert _load_toml_colors(theme_file) == {"text": "#000000"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when file doesn't exist."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _load_toml_colors(theme_file) is None


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_loads_bundled_theme(self, tmp_path: Path) -> None:
        """Bundled values apply without a user theme."""
        with patch(
            "setupctl.core.theme.get_user_theme_path",
            return_value=tmp_path / "missing.toml",
        ):
            colors = load_theme()

        assert colors.status_installed == "#c1ff62"
        assert colors.priority_medium == "#0e8ac8"

    def test_partial_user_override(self, tmp_path: Path) -> None:
        """User theme overrides only the colors it names."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nstatus_failed = "#ff0000"\n')

        with patch("setupctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.status_failed == "#ff0000"
        assert colors.status_satisfied == "#69B9A1"

    def test_invalid_user_values_fall_back(self, tmp_path: Path) -> None:
        """An invalid user color falls back to defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        with patch("setupctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme and get_theme functions."""

    def test_status_and_priority_styles(self) -> None:
        """Theme defines a style per install status and priority."""
        theme = get_rich_theme(ThemeColors())

        for name in ("satisfied", "installed", "failed", "missing"):
            assert f"status.{name}" in theme.styles
        for name in ("high", "medium", "low"):
            assert f"priority.{name}" in theme.styles
        assert "tool.name" in theme.styles

    def test_caches_theme(self) -> None:
        """get_theme returns the cached instance."""
        theme_module._cached_theme = None

        first = get_theme()

        assert isinstance(first, Theme)
        assert get_theme() is first
