"""macOS detection.

macOS has a single identification path through sw_vers; the Linux
fallback chain never applies.
"""

import logging

from setupctl.detection.base import DistroInfo
from setupctl.models.system import Family
from setupctl.utils.shell import try_run_command

logger = logging.getLogger(__name__)

# Major version -> marketing name (macOS 11+)
_CODENAMES = {
    "15": "Sequoia",
    "14": "Sonoma",
    "13": "Ventura",
    "12": "Monterey",
    "11": "Big Sur",
}

# 10.x minor series -> marketing name
_LEGACY_CODENAMES = {
    "10.15": "Catalina",
    "10.14": "Mojave",
    "10.13": "High Sierra",
}


def macos_codename(version: str) -> str:
    """Return the marketing name for a macOS version string.

    Args:
        version: Product version such as '14.4.1' or '10.15.7'.

    Returns:
        Codename, or 'macOS' if the version is not recognised.
    """
    major = version.split(".", 1)[0]
    if major == "10":
        series = ".".join(version.split(".")[:2])
        return _LEGACY_CODENAMES.get(series, "macOS")
    return _CODENAMES.get(major, "macOS")


def detect_macos() -> tuple[DistroInfo, str | None]:
    """Identify the running macOS release.

    Returns:
        Tuple of (DistroInfo, build identifier or None).
    """
    logger.debug("Detecting macOS system")

    version = _sw_vers("-productVersion") or "unknown"
    build = _sw_vers("-buildVersion") or None

    info = DistroInfo(
        id="macos",
        name="macOS",
        version=version,
        codename=macos_codename(version),
        family=Family.DARWIN,
    )
    return info, build


def _sw_vers(flag: str) -> str:
    """Run sw_vers with a single flag, returning stripped stdout or ''."""
    result = try_run_command(["sw_vers", flag], timeout=10.0)
    return result.stdout.strip() if result.success else ""
