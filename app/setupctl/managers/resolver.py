"""Package manager resolution.

Maps a distribution family to the first installed package manager among
its candidates, and looks up that manager's command templates. Nothing
here executes a package manager; the result is pure data.
"""

import logging
from collections.abc import Callable

from setupctl.models.manager import CommandTemplate, PackageManagerProfile
from setupctl.models.system import Family
from setupctl.utils.shell import command_exists

logger = logging.getLogger(__name__)


class UnsupportedManagerError(Exception):
    """Raised when no candidate package manager is installed for a family."""


# Family -> candidate manager ids, most preferred first
FAMILY_MANAGERS: dict[Family, tuple[str, ...]] = {
    Family.DEBIAN: ("apt", "apt-get"),
    Family.REDHAT: ("dnf", "yum"),
    Family.ARCH: ("pacman",),
    Family.SUSE: ("zypper",),
    Family.ALPINE: ("apk",),
    Family.DARWIN: ("brew",),
}

_DPKG_QUERY = CommandTemplate("dpkg-query", ("-W", "-f=${Status}"))
_RPM_QUERY = CommandTemplate("rpm", ("-q",))

MANAGER_PROFILES: dict[str, PackageManagerProfile] = {
    "apt": PackageManagerProfile(
        id="apt",
        install=CommandTemplate("apt", ("install", "-y")),
        update=CommandTemplate("apt", ("update",)),
        search=CommandTemplate("apt", ("search",)),
        remove=CommandTemplate("apt", ("remove", "-y")),
        query=_DPKG_QUERY,
        query_marker="install ok installed",
    ),
    "apt-get": PackageManagerProfile(
        id="apt-get",
        install=CommandTemplate("apt-get", ("install", "-y")),
        update=CommandTemplate("apt-get", ("update",)),
        search=CommandTemplate("apt-cache", ("search",)),
        remove=CommandTemplate("apt-get", ("remove", "-y")),
        query=_DPKG_QUERY,
        query_marker="install ok installed",
    ),
    "dnf": PackageManagerProfile(
        id="dnf",
        install=CommandTemplate("dnf", ("install", "-y")),
        update=CommandTemplate("dnf", ("makecache",)),
        search=CommandTemplate("dnf", ("search",)),
        remove=CommandTemplate("dnf", ("remove", "-y")),
        query=_RPM_QUERY,
    ),
    "yum": PackageManagerProfile(
        id="yum",
        install=CommandTemplate("yum", ("install", "-y")),
        update=CommandTemplate("yum", ("makecache",)),
        search=CommandTemplate("yum", ("search",)),
        remove=CommandTemplate("yum", ("remove", "-y")),
        query=_RPM_QUERY,
    ),
    "pacman": PackageManagerProfile(
        id="pacman",
        install=CommandTemplate("pacman", ("-S", "--noconfirm", "--needed")),
        update=CommandTemplate("pacman", ("-Sy",)),
        search=CommandTemplate("pacman", ("-Ss",)),
        remove=CommandTemplate("pacman", ("-R", "--noconfirm")),
        query=CommandTemplate("pacman", ("-Q",)),
    ),
    "zypper": PackageManagerProfile(
        id="zypper",
        install=CommandTemplate("zypper", ("--non-interactive", "install")),
        update=CommandTemplate("zypper", ("refresh",)),
        search=CommandTemplate("zypper", ("search",)),
        remove=CommandTemplate("zypper", ("--non-interactive", "remove")),
        query=_RPM_QUERY,
    ),
    "apk": PackageManagerProfile(
        id="apk",
        install=CommandTemplate("apk", ("add",)),
        update=CommandTemplate("apk", ("update",)),
        search=CommandTemplate("apk", ("search",)),
        remove=CommandTemplate("apk", ("del",)),
        query=CommandTemplate("apk", ("info", "-e")),
    ),
    "brew": PackageManagerProfile(
        id="brew",
        install=CommandTemplate("brew", ("install",)),
        update=CommandTemplate("brew", ("update",)),
        search=CommandTemplate("brew", ("search",)),
        remove=CommandTemplate("brew", ("uninstall",)),
        query=CommandTemplate("brew", ("list", "--versions")),
        privileged=False,
    ),
}


def candidate_managers(family: Family) -> tuple[str, ...]:
    """Return the candidate manager ids for a family, most preferred first."""
    return FAMILY_MANAGERS.get(family, ())


def get_manager_profile(manager_id: str) -> PackageManagerProfile:
    """Look up the command templates for a manager id.

    Raises:
        UnsupportedManagerError: If the manager id is unknown.
    """
    try:
        return MANAGER_PROFILES[manager_id]
    except KeyError:
        msg = f"Unknown package manager: {manager_id}"
        raise UnsupportedManagerError(msg) from None


def resolve_manager(
    family: Family,
    *,
    is_available: Callable[[str], bool] = command_exists,
) -> PackageManagerProfile:
    """Select the first installed package manager for a family.

    Args:
        family: Distribution family from the SystemProfile.
        is_available: Predicate telling whether an executable is installed.

    Returns:
        PackageManagerProfile for the selected manager.

    Raises:
        UnsupportedManagerError: If the family has no candidates, or none
            of its candidate executables is installed.
    """
    candidates = candidate_managers(family)
    if not candidates:
        msg = f"Unsupported distribution family: {family.value}"
        raise UnsupportedManagerError(msg)

    for manager_id in candidates:
        if is_available(manager_id):
            logger.info("Detected package manager: %s", manager_id)
            return get_manager_profile(manager_id)
        logger.debug("Package manager %s not found", manager_id)

    msg = f"No package manager found for {family.value} (tried: {', '.join(candidates)})"
    raise UnsupportedManagerError(msg)
