"""Unit tests for system and package manager models."""

from dataclasses import FrozenInstanceError

import pytest
from setupctl.models.manager import CommandTemplate, PackageManagerProfile
from setupctl.models.system import Family, SupportLevel, SystemProfile


class TestSystemProfile:
    """Tests for SystemProfile dataclass."""

    def test_display_name_with_codename(self, debian_system: SystemProfile) -> None:
        """display_name includes the codename in parentheses."""
        assert debian_system.display_name == "Ubuntu 24.04 (noble)"

    def test_display_name_without_codename(self) -> None:
        """display_name omits empty codenames."""
        profile = SystemProfile(
            id="arch",
            name="Arch Linux",
            version="rolling",
            codename="",
            family=Family.ARCH,
            architecture="x86_64",
            support_level=SupportLevel.PARTIAL,
        )
        assert profile.display_name == "Arch Linux rolling"

    def test_empty_id_rejected(self) -> None:
        """SystemProfile requires an id."""
        with pytest.raises(ValueError, match="cannot be empty"):
            SystemProfile(
                id="",
                name="x",
                version="1",
                codename="",
                family=Family.DEBIAN,
                architecture="x86_64",
                support_level=SupportLevel.FULL,
            )

    def test_is_immutable(self, debian_system: SystemProfile) -> None:
        """SystemProfile cannot be mutated."""
        with pytest.raises(FrozenInstanceError):
            debian_system.id = "debian"  # type: ignore[misc]

    def test_is_supported(self, debian_system: SystemProfile) -> None:
        """Only UNSUPPORTED profiles report as unsupported."""
        assert debian_system.is_supported
        unsupported = SystemProfile(
            id="gentoo",
            name="Gentoo",
            version="2.15",
            codename="",
            family=Family.UNKNOWN,
            architecture="x86_64",
            support_level=SupportLevel.UNSUPPORTED,
        )
        assert not unsupported.is_supported

    def test_to_dict(self, debian_system: SystemProfile) -> None:
        """to_dict serializes enum values."""
        data = debian_system.to_dict()
        assert data["family"] == "debian"
        assert data["support_level"] == "full"
        assert data["build"] is None


class TestCommandTemplate:
    """Tests for CommandTemplate dataclass."""

    def test_render_appends_operands(self) -> None:
        """render appends packages after the fixed arguments."""
        template = CommandTemplate("apt", ("install", "-y"))
        assert template.render("git", "vim") == ["apt", "install", "-y", "git", "vim"]

    def test_render_without_operands(self) -> None:
        """render without operands returns program and fixed args."""
        assert CommandTemplate("apt", ("update",)).render() == ["apt", "update"]

    def test_str(self) -> None:
        """str joins the argument list."""
        assert str(CommandTemplate("pacman", ("-S", "--noconfirm"))) == "pacman -S --noconfirm"


class TestPackageManagerProfile:
    """Tests for PackageManagerProfile dataclass."""

    def test_to_dict(self, apt_profile: PackageManagerProfile) -> None:
        """to_dict renders templates as strings."""
        data = apt_profile.to_dict()
        assert data["id"] == "apt"
        assert data["install"] == "apt install -y"
        assert data["privileged"] is True
