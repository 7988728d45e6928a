"""Package operator.

Executes a resolved manager's command templates. The operator is the
only component that invokes the package manager, and it does so one
blocking command at a time.
"""

import logging
import os

from setupctl.models.manager import CommandTemplate, PackageManagerProfile
from setupctl.utils.shell import CommandResult, run_with_retry, try_run_command

logger = logging.getLogger(__name__)


def _is_root() -> bool:
    """Check if the current process runs with root privileges."""
    return hasattr(os, "geteuid") and os.geteuid() == 0


class PackageOperator:
    """Operator for the package manager described by a PackageManagerProfile.

    Attributes:
        manager: The resolved manager profile.

    Example:
        >>> operator = PackageOperator(resolve_manager(Family.DEBIAN))
        >>> result = operator.install(["htop", "tmux"])
        >>> result.success
        True
    """

    # Timeout for read-only queries; installs and refreshes run unbounded
    _QUERY_TIMEOUT: float = 60.0

    def __init__(
        self,
        manager: PackageManagerProfile,
        *,
        use_sudo: bool = True,
        retry_attempts: int = 3,
        retry_delay: float = 2.0,
    ) -> None:
        """Initialize the operator.

        Args:
            manager: Manager profile whose templates are executed.
            use_sudo: Prefix privileged commands with sudo when not root.
            retry_attempts: Attempts for network-dependent commands.
            retry_delay: Fixed delay in seconds between attempts.
        """
        self._manager = manager
        self._use_sudo = use_sudo
        self._retry_attempts = retry_attempts
        self._retry_delay = retry_delay

    @property
    def manager(self) -> PackageManagerProfile:
        """Return the manager profile."""
        return self._manager

    def install(self, packages: list[str]) -> CommandResult:
        """Install one or more packages in a single manager invocation.

        Args:
            packages: Native package identifiers.

        Returns:
            CommandResult of the invocation. The exit status covers the whole
            request; it says nothing reliable about individual packages.
        """
        if not packages:
            return CommandResult(stdout="", stderr="", returncode=0)

        logger.info("Executing %s install for packages: %s", self._manager.id, ", ".join(packages))
        result = try_run_command(self._privileged(self._manager.install, packages), timeout=None)
        if not result.success:
            logger.warning(
                "%s install of %s exited with %d: %s",
                self._manager.id,
                ", ".join(packages),
                result.returncode,
                result.error_summary or "no error output",
            )
        return result

    def remove(self, packages: list[str]) -> CommandResult:
        """Remove one or more packages."""
        if not packages:
            return CommandResult(stdout="", stderr="", returncode=0)

        logger.info("Executing %s remove for packages: %s", self._manager.id, ", ".join(packages))
        return try_run_command(self._privileged(self._manager.remove, packages), timeout=None)

    def search(self, term: str) -> CommandResult:
        """Search the package index."""
        return try_run_command(self._manager.search.render(term), timeout=self._QUERY_TIMEOUT)

    def refresh_index(self) -> CommandResult:
        """Refresh the package index with a fixed-count retry.

        Returns:
            The final CommandResult. A failure is a soft condition for callers.
        """
        logger.info("Refreshing %s package index", self._manager.id)
        return run_with_retry(
            self._privileged(self._manager.update, []),
            attempts=self._retry_attempts,
            delay=self._retry_delay,
        )

    def is_installed(self, package: str) -> bool:
        """Query the installed-package database for a single package.

        Args:
            package: Native package identifier.

        Returns:
            True if the manager reports the package as installed.
        """
        result = try_run_command(self._manager.query.render(package), timeout=self._QUERY_TIMEOUT)
        if not result.success:
            return False
        if self._manager.query_marker is not None:
            return self._manager.query_marker in result.stdout
        return True

    def _privileged(self, template: CommandTemplate, operands: list[str]) -> list[str]:
        """Render a template, adding sudo when the manager needs root."""
        args = template.render(*operands)
        if self._manager.privileged and self._use_sudo and not _is_root():
            return ["sudo", *args]
        return args
