"""System identity models.

This module defines the immutable description of the host produced once
per run by the capability detector.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Family(Enum):
    """Distribution family sharing a package-manager lineage."""

    DEBIAN = "debian"
    REDHAT = "redhat"
    ARCH = "arch"
    SUSE = "suse"
    ALPINE = "alpine"
    DARWIN = "darwin"
    UNKNOWN = "unknown"


class SupportLevel(Enum):
    """How well a distribution is supported by the tool catalogue."""

    FULL = "full"
    PARTIAL = "partial"
    EXPERIMENTAL = "experimental"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class SystemProfile:
    """Detected identity of the host.

    Created once per run by the Detector and never mutated afterwards.

    Attributes:
        id: Distribution identifier (e.g., 'ubuntu', 'fedora', 'macos').
        name: Human-readable distribution name.
        version: Distribution version string.
        codename: Release codename, empty if the distribution has none.
        family: Package-manager lineage of the distribution.
        architecture: Normalized machine architecture (x86_64, i386, arm64, armhf).
        support_level: Support level from the allow-list.
        build: Build identifier (macOS only).
    """

    id: str
    name: str
    version: str
    codename: str
    family: Family
    architecture: str
    support_level: SupportLevel
    build: str | None = None

    def __post_init__(self) -> None:
        """Validate profile data after initialization."""
        if not self.id:
            msg = "Distribution id cannot be empty"
            raise ValueError(msg)

    @property
    def is_supported(self) -> bool:
        """Check if the distribution is on the support allow-list."""
        return self.support_level != SupportLevel.UNSUPPORTED

    @property
    def display_name(self) -> str:
        """Return a one-line description such as 'Ubuntu 24.04 (noble)'."""
        label = f"{self.name} {self.version}"
        if self.codename:
            label += f" ({self.codename})"
        return label

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "codename": self.codename,
            "family": self.family.value,
            "architecture": self.architecture,
            "support_level": self.support_level.value,
            "build": self.build,
        }
