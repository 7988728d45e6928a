"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path
from typing import Any

import pytest
from setupctl.managers.resolver import MANAGER_PROFILES
from setupctl.models.manager import PackageManagerProfile
from setupctl.models.registry import ToolRegistry
from setupctl.models.system import Family, SupportLevel, SystemProfile
from setupctl.registry.loader import parse_registry


@pytest.fixture
def registry_data() -> dict[str, Any]:
    """Small registry document covering every presence rule."""
    return {
        "version": "1.0",
        "description": "Test registry",
        "categories": {
            "core": {
                "description": "Core tools",
                "priority": "high",
                "batch_size": 4,
                "tools": ["git", "vim", "curl", "wget"],
            },
            "build": {
                "description": "Build tools",
                "priority": "high",
                "batch_size": 1,
                "tools": ["build-essential"],
            },
            "network": {
                "description": "Network tools",
                "priority": "medium",
                "batch_size": 2,
                "tools": ["netcat", "rsync"],
            },
            "extras": {
                "description": "Extra tools",
                "priority": "low",
                "batch_size": 3,
                "tools": ["bat", "jq"],
            },
        },
        "tools": {
            "git": {"description": "Version control", "probe": ["git", "--version"]},
            "build-essential": {
                "presence": {"method": "package_query"},
                "probe": ["gcc", "--version"],
                "overrides": {
                    "apt": {"packages": ["build-essential"]},
                    "dnf": {
                        "packages": ["gcc", "gcc-c++", "make"],
                        "presence": {"method": "command", "commands": ["gcc"]},
                    },
                },
            },
            "netcat": {
                "presence": {"method": "any_of", "commands": ["nc", "netcat"]},
                "alternatives": ["netcat-traditional"],
                "overrides": {"apt": {"packages": ["netcat-openbsd"]}},
            },
            "bat": {"presence": {"method": "alternate_names", "commands": ["batcat"]}},
        },
    }


@pytest.fixture
def sample_registry(registry_data: dict[str, Any]) -> ToolRegistry:
    """Validated registry built from registry_data."""
    return parse_registry(registry_data)


@pytest.fixture
def debian_system() -> SystemProfile:
    """SystemProfile of a Debian-family host."""
    return SystemProfile(
        id="ubuntu",
        name="Ubuntu",
        version="24.04",
        codename="noble",
        family=Family.DEBIAN,
        architecture="x86_64",
        support_level=SupportLevel.FULL,
    )


@pytest.fixture
def apt_profile() -> PackageManagerProfile:
    """Command templates of apt."""
    return MANAGER_PROFILES["apt"]


@pytest.fixture
def os_release_root(tmp_path: Path) -> Path:
    """Filesystem root containing an Ubuntu /etc/os-release."""
    etc = tmp_path / "etc"
    etc.mkdir()
    (etc / "os-release").write_text(
        'NAME="Ubuntu"\n'
        'VERSION="24.04 LTS (Noble Numbat)"\n'
        "ID=ubuntu\n"
        "ID_LIKE=debian\n"
        'VERSION_ID="24.04"\n'
        "VERSION_CODENAME=noble\n"
    )
    return tmp_path
