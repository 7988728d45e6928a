"""Capability detector.

Identifies the OS kind, distribution, version, family, normalized
architecture and support level, producing one immutable SystemProfile.
"""

import logging
import platform
from pathlib import Path

from setupctl.detection.base import DetectionError, DetectionStrategy, DistroInfo
from setupctl.detection.lsb_release import LsbReleaseStrategy
from setupctl.detection.macos import detect_macos
from setupctl.detection.os_release import OsReleaseStrategy
from setupctl.detection.release_files import ReleaseFilesStrategy
from setupctl.models.system import Family, SupportLevel, SystemProfile

logger = logging.getLogger(__name__)

# Raw machine name -> canonical architecture
ARCHITECTURE_ALIASES: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "i386": "i386",
    "i586": "i386",
    "i686": "i386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "armhf",
    "armhf": "armhf",
}

# Distribution id -> family, used when the winning strategy did not set one
FAMILY_BY_ID: dict[str, Family] = {
    "ubuntu": Family.DEBIAN,
    "debian": Family.DEBIAN,
    "raspbian": Family.DEBIAN,
    "linuxmint": Family.DEBIAN,
    "pop": Family.DEBIAN,
    "kali": Family.DEBIAN,
    "centos": Family.REDHAT,
    "rhel": Family.REDHAT,
    "fedora": Family.REDHAT,
    "amzn": Family.REDHAT,
    "rocky": Family.REDHAT,
    "almalinux": Family.REDHAT,
    "ol": Family.REDHAT,
    "arch": Family.ARCH,
    "manjaro": Family.ARCH,
    "endeavouros": Family.ARCH,
    "opensuse": Family.SUSE,
    "opensuse-leap": Family.SUSE,
    "opensuse-tumbleweed": Family.SUSE,
    "sles": Family.SUSE,
    "alpine": Family.ALPINE,
    "macos": Family.DARWIN,
}

SUPPORT_LEVELS: dict[str, SupportLevel] = {
    **dict.fromkeys(
        ("ubuntu", "debian", "centos", "rhel", "fedora", "macos"),
        SupportLevel.FULL,
    ),
    **dict.fromkeys(
        (
            "arch",
            "opensuse",
            "opensuse-leap",
            "opensuse-tumbleweed",
            "amzn",
            "rocky",
            "almalinux",
        ),
        SupportLevel.PARTIAL,
    ),
    **dict.fromkeys(
        ("alpine", "manjaro", "pop", "linuxmint"),
        SupportLevel.EXPERIMENTAL,
    ),
}


def normalize_architecture(machine: str) -> str:
    """Collapse architecture aliases to a canonical name.

    Args:
        machine: Raw machine name as reported by uname.

    Returns:
        Canonical architecture; unknown names pass through lower-cased.
    """
    raw = machine.strip().lower()
    return ARCHITECTURE_ALIASES.get(raw, raw)


def resolve_family(distro_id: str, id_like: tuple[str, ...] = ()) -> Family:
    """Look up the family for a distribution id.

    Args:
        distro_id: Lower-case distribution id.
        id_like: Related ids from os-release, consulted if the id is unknown.

    Returns:
        The resolved Family, or Family.UNKNOWN.
    """
    if distro_id in FAMILY_BY_ID:
        return FAMILY_BY_ID[distro_id]
    for related in id_like:
        if related in FAMILY_BY_ID:
            return FAMILY_BY_ID[related]
    return Family.UNKNOWN


def support_level_for(distro_id: str) -> SupportLevel:
    """Return the support level for a distribution id."""
    return SUPPORT_LEVELS.get(distro_id, SupportLevel.UNSUPPORTED)


class Detector:
    """Identify the host system.

    Example:
        >>> profile = Detector().detect()
        >>> profile.family
        <Family.DEBIAN: 'debian'>
    """

    def __init__(
        self,
        strategies: list[DetectionStrategy] | None = None,
        *,
        root: Path = Path("/"),
    ) -> None:
        """Initialize the detector.

        Args:
            strategies: Linux strategies in priority order. Defaults to
                os-release, lsb_release, then legacy release files.
            root: Filesystem root passed to the default strategies.
        """
        if strategies is None:
            strategies = [
                OsReleaseStrategy(root),
                LsbReleaseStrategy(root),
                ReleaseFilesStrategy(root),
            ]
        self._strategies = strategies

    def detect(self) -> SystemProfile:
        """Detect the host and build a SystemProfile.

        Returns:
            Immutable SystemProfile.

        Raises:
            DetectionError: If no strategy identifies the distribution, or
                the family cannot be resolved.
        """
        os_kind = platform.system()
        build: str | None = None

        if os_kind == "Darwin":
            info, build = detect_macos()
        elif os_kind == "Linux":
            info = self._detect_linux()
        else:
            msg = f"Unsupported operating system: {os_kind or 'unknown'}"
            raise DetectionError(msg)

        architecture = normalize_architecture(platform.machine())
        logger.debug("Architecture: %s", architecture)

        profile = self._validate(info, architecture, build)
        if not profile.is_supported:
            logger.warning(
                "Distribution %s is not officially supported; installation may not work correctly",
                profile.id,
            )

        logger.info(
            "Detected %s [id=%s family=%s arch=%s support=%s]",
            profile.display_name,
            profile.id,
            profile.family.value,
            profile.architecture,
            profile.support_level.value,
        )
        return profile

    def _detect_linux(self) -> DistroInfo:
        """Run the strategy chain, stopping at the first non-empty id."""
        for strategy in self._strategies:
            info = strategy.detect()
            if info is not None and info.id:
                logger.debug("Distribution detected using %s", strategy.name)
                return info
            logger.debug("Strategy %s yielded no distribution id", strategy.name)
        return DistroInfo()

    def _validate(self, info: DistroInfo, architecture: str, build: str | None) -> SystemProfile:
        """Fill defaults, resolve the family and build the profile."""
        if not info.id:
            msg = "Failed to detect distribution: no identifying signal found"
            raise DetectionError(msg)

        name = info.name
        if not name:
            logger.warning("Distribution name not detected, using id: %s", info.id)
            name = info.id

        version = info.version
        if not version:
            logger.warning("Distribution version not detected, using id: %s", info.id)
            version = info.id

        family = info.family or resolve_family(info.id, info.id_like)
        if family == Family.UNKNOWN:
            msg = f"Could not determine distribution family for '{info.id}'"
            raise DetectionError(msg)

        return SystemProfile(
            id=info.id,
            name=name,
            version=version,
            codename=info.codename,
            family=family,
            architecture=architecture,
            support_level=support_level_for(info.id),
            build=build,
        )
