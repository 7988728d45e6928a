"""Legacy release-file detection strategy.

Older distributions ship a per-distribution marker file in free-form
text instead of os-release. Each marker has its own parser, and the
marker itself determines the family.
"""

import logging
import re
from collections.abc import Callable

from setupctl.detection.base import DetectionStrategy, DistroInfo
from setupctl.detection.os_release import parse_os_release
from setupctl.models.system import Family

logger = logging.getLogger(__name__)

_DOTTED_VERSION = re.compile(r"(\d+\.\d+)")
_MAJOR_VERSION = re.compile(r"(\d+)")
_SUSE_VERSION = re.compile(r"VERSION\s*=\s*([\d.]+)")

# Substring in redhat-release -> (id, name); first match wins
_REDHAT_VARIANTS = (
    ("CentOS", "centos", "CentOS"),
    ("Red Hat Enterprise Linux", "rhel", "Red Hat Enterprise Linux"),
    ("Fedora", "fedora", "Fedora"),
    ("Amazon Linux", "amzn", "Amazon Linux"),
    ("Rocky Linux", "rocky", "Rocky Linux"),
    ("AlmaLinux", "almalinux", "AlmaLinux"),
)


def parse_redhat_release(content: str, info: DistroInfo) -> None:
    """Parse /etc/redhat-release, e.g. 'CentOS Linux release 7.9.2009 (Core)'."""
    for marker, distro_id, name in _REDHAT_VARIANTS:
        if marker in content:
            info.id = distro_id
            info.name = name
            break

    match = _DOTTED_VERSION.search(content) or _MAJOR_VERSION.search(content)
    if match:
        info.version = match.group(1)


def parse_suse_release(content: str, info: DistroInfo) -> None:
    """Parse /etc/SuSE-release."""
    if "openSUSE" in content:
        info.id = "opensuse"
        info.name = "openSUSE"
    else:
        info.id = "sles"
        info.name = "SUSE Linux"

    match = _SUSE_VERSION.search(content)
    if match:
        info.version = match.group(1)


def parse_arch_release(content: str, info: DistroInfo) -> None:
    """Arch is rolling; the marker file is usually empty."""
    info.id = "arch"
    info.name = "Arch Linux"
    info.version = "rolling"


def parse_alpine_release(content: str, info: DistroInfo) -> None:
    """Parse /etc/alpine-release, which holds only the version."""
    info.id = "alpine"
    info.name = "Alpine Linux"
    info.version = content.strip()


class ReleaseFilesStrategy(DetectionStrategy):
    """Detect the distribution from legacy marker files."""

    @property
    def name(self) -> str:
        """Return the strategy name."""
        return "release-files"

    def _markers(self) -> list[tuple[str, Family, Callable[[str, DistroInfo], None]]]:
        """Marker files in the order they are checked."""
        return [
            ("/etc/redhat-release", Family.REDHAT, parse_redhat_release),
            ("/etc/debian_version", Family.DEBIAN, self._parse_debian_version),
            ("/etc/arch-release", Family.ARCH, parse_arch_release),
            ("/etc/SuSE-release", Family.SUSE, parse_suse_release),
            ("/etc/suse-release", Family.SUSE, parse_suse_release),
            ("/etc/alpine-release", Family.ALPINE, parse_alpine_release),
        ]

    def detect(self) -> DistroInfo | None:
        """Parse the first marker file found."""
        for path, family, parser in self._markers():
            content = self._read(path)
            if content is None:
                continue

            logger.debug("Found release file: %s", path)
            info = DistroInfo(family=family)
            parser(content, info)
            return info
        return None

    def _parse_debian_version(self, content: str, info: DistroInfo) -> None:
        """Parse /etc/debian_version, using /etc/lsb-release to spot Ubuntu."""
        info.id = "debian"
        info.name = "Debian"
        info.version = content.strip()

        lsb_content = self._read("/etc/lsb-release")
        if lsb_content is None:
            return

        lsb = parse_os_release(lsb_content)
        if lsb.get("DISTRIB_ID", "").lower() == "ubuntu":
            info.id = "ubuntu"
            info.name = "Ubuntu"
            info.version = lsb.get("DISTRIB_RELEASE", info.version)
            info.codename = lsb.get("DISTRIB_CODENAME", "")
