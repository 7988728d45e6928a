"""Unit tests for registry file I/O."""

from pathlib import Path
from typing import Any

import pytest
import tomli_w
from setupctl.engine.translator import NameTranslator
from setupctl.models.registry import PresenceMethod, Priority, ToolRegistry
from setupctl.registry.loader import (
    RegistryError,
    RegistryNotFoundError,
    RegistryParseError,
    RegistryValidationError,
    get_active_registry_path,
    get_bundled_registry_path,
    load_registry,
    save_registry,
)


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


class TestBundledRegistry:
    """Tests for the registry shipped with the package."""

    def test_loads(self) -> None:
        """The bundled catalogue validates."""
        registry = load_registry(Path(get_bundled_registry_path()))
        assert len(registry.categories) == 7
        assert registry.tool_count == 23

    def test_category_order(self) -> None:
        """High-priority categories come first."""
        registry = load_registry(Path(get_bundled_registry_path()))
        ordered = registry.ordered_categories()
        assert ordered[0].id == "core_development"
        assert ordered[0].priority == Priority.HIGH
        assert ordered[-1].priority == Priority.LOW

    def test_every_tool_translates_for_every_manager(self) -> None:
        """Overrides never map a tool to an empty package list."""
        registry = load_registry(Path(get_bundled_registry_path()))
        translator = NameTranslator(registry)
        for category in registry.categories.values():
            for tool in category.tools:
                for manager_id in ("apt", "dnf", "pacman", "zypper", "apk", "brew"):
                    assert translator.native_identifiers(tool.name, manager_id)

    def test_build_essential_rules(self) -> None:
        """build-essential is a package query on apt, gcc elsewhere."""
        tool = load_registry(Path(get_bundled_registry_path())).find_tool("build-essential")
        assert tool is not None
        assert tool.presence_for("apt").method == PresenceMethod.PACKAGE_QUERY
        assert tool.presence_for("dnf").candidate_commands("build-essential") == ["gcc"]


class TestLoadRegistry:
    """Tests for load_registry function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises RegistryNotFoundError."""
        with pytest.raises(RegistryNotFoundError):
            load_registry(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken syntax raises RegistryParseError."""
        path = tmp_path / "tools.toml"
        path.write_text("[categories\n")
        with pytest.raises(RegistryParseError, match="Invalid TOML"):
            load_registry(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise RegistryValidationError."""
        path = tmp_path / "tools.toml"
        path.write_text('[categories.core]\ndescription = "x"\npriority = "urgent"\n')
        with pytest.raises(RegistryValidationError, match="Invalid registry content"):
            load_registry(path)

    def test_explicit_path(self, tmp_path: Path, registry_data: dict[str, Any]) -> None:
        """An explicit path is read as-is."""
        path = tmp_path / "tools.toml"
        path.write_bytes(tomli_w.dumps(registry_data).encode())

        registry = load_registry(path)

        assert registry.tool_count == 9


class TestActiveRegistryPath:
    """Tests for get_active_registry_path function."""

    def test_explicit_wins(self, config_home: Path, tmp_path: Path) -> None:
        """An explicit path is returned even if it does not exist."""
        explicit = tmp_path / "custom.toml"
        assert get_active_registry_path(explicit) == explicit

    def test_bundled_without_user_file(self, config_home: Path) -> None:
        """Without a user registry the bundled one is used."""
        assert get_active_registry_path() == Path(get_bundled_registry_path())

    def test_user_file_wins(self, config_home: Path) -> None:
        """An existing user registry replaces the bundled one."""
        user_path = config_home / "setupctl" / "tools.toml"
        user_path.parent.mkdir(parents=True)
        user_path.write_text("")
        assert get_active_registry_path() == user_path


class TestSaveRegistry:
    """Tests for save_registry function."""

    def test_round_trip(self, tmp_path: Path, sample_registry: ToolRegistry) -> None:
        """A saved registry loads back unchanged."""
        path = save_registry(sample_registry, tmp_path / "nested" / "tools.toml")

        assert path.exists()
        assert load_registry(path) == sample_registry

    def test_default_path(self, config_home: Path, sample_registry: ToolRegistry) -> None:
        """Without a path the user registry is written."""
        path = save_registry(sample_registry)
        assert path == config_home / "setupctl" / "tools.toml"
        assert not list(path.parent.glob("*.tmp"))

    def test_unwritable_parent(self, tmp_path: Path, sample_registry: ToolRegistry) -> None:
        """A parent that cannot be created raises RegistryError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(RegistryError, match="Failed to write registry"):
            save_registry(sample_registry, blocker / "setupctl" / "tools.toml")
