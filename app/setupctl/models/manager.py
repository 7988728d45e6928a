"""Package manager models.

A resolved package manager is described entirely by data: an identifier
and a set of structured command templates. No shell strings are built;
packages are appended to an argument list.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CommandTemplate:
    """A structured command descriptor.

    Attributes:
        program: Executable to invoke (e.g., 'apt-get').
        args: Fixed arguments placed before any packages or search terms.
    """

    program: str
    args: tuple[str, ...] = ()

    def render(self, *operands: str) -> list[str]:
        """Build the argument list for execution.

        Args:
            operands: Package names or search terms appended after the fixed args.

        Returns:
            Argument list suitable for run_command().
        """
        return [self.program, *self.args, *operands]

    def __str__(self) -> str:
        return " ".join(self.render())


@dataclass(frozen=True, slots=True)
class PackageManagerProfile:
    """A resolved package manager and its command templates.

    Attributes:
        id: Manager identifier (apt, apt-get, dnf, yum, pacman, zypper, apk, brew).
        install: Install template; accepts a variable-length package list.
        update: Package index refresh template.
        search: Search template.
        remove: Remove template.
        query: Installed-package database query for a single package.
        query_marker: If set, query stdout must contain this text for a hit.
        privileged: Whether commands need root privileges.
    """

    id: str
    install: CommandTemplate
    update: CommandTemplate
    search: CommandTemplate
    remove: CommandTemplate
    query: CommandTemplate
    query_marker: str | None = None
    privileged: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "install": str(self.install),
            "update": str(self.update),
            "search": str(self.search),
            "remove": str(self.remove),
            "query": str(self.query),
            "privileged": self.privileged,
        }
