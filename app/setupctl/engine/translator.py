"""Name translation and presence checks.

Maps a generic tool name to the native identifiers a package manager
uses, and decides whether the tool is already present on the host. The
two questions are deliberately independent: a native package name is
not assumed to match any runnable binary.
"""

import logging
from collections.abc import Callable

from setupctl.models.registry import PresenceMethod, PresenceRule, ToolRegistry
from setupctl.utils.shell import command_exists

logger = logging.getLogger(__name__)


class NameTranslator:
    """Translate generic names for a manager and check tool presence.

    Example:
        >>> translator = NameTranslator(registry, package_query=operator.is_installed)
        >>> translator.native_identifiers("netcat", "apt")
        ['netcat-openbsd']
        >>> translator.is_present("netcat", "apt")
        True
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        command_lookup: Callable[[str], bool] = command_exists,
        package_query: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            registry: Tool catalogue with per-manager overrides.
            command_lookup: Predicate telling whether a binary is on PATH.
            package_query: Installed-package query of the session's manager.
                Required for tools whose presence rule is package_query.
        """
        self._registry = registry
        self._command_lookup = command_lookup
        self._package_query = package_query

    def native_identifiers(self, generic_name: str, manager_id: str) -> list[str]:
        """Return the native package identifiers for a generic name.

        An explicit override for the manager wins, and may expand to several
        identifiers. Otherwise the generic name is used verbatim.

        Returns:
            Non-empty list of native identifiers.
        """
        tool = self._registry.find_tool(generic_name)
        if tool is not None:
            override = tool.override_for(manager_id)
            if override is not None and override.packages:
                return list(override.packages)
        return [generic_name]

    def presence_rule(self, generic_name: str, manager_id: str) -> PresenceRule:
        """Return the effective presence rule for a tool and manager."""
        tool = self._registry.find_tool(generic_name)
        if tool is None:
            return PresenceRule()
        return tool.presence_for(manager_id)

    def is_present(self, generic_name: str, manager_id: str) -> bool:
        """Check whether the tool is already present on the host.

        Args:
            generic_name: Generic tool name.
            manager_id: Id of the session's package manager.

        Returns:
            True if the tool's presence rule is satisfied.
        """
        rule = self.presence_rule(generic_name, manager_id)

        if rule.method == PresenceMethod.PACKAGE_QUERY:
            if self._package_query is None:
                logger.debug("No package query available to check %s", generic_name)
                return False
            packages = self.native_identifiers(generic_name, manager_id)
            return all(self._package_query(package) for package in packages)

        for command in rule.candidate_commands(generic_name):
            if self._command_lookup(command):
                logger.debug("%s is present as %s", generic_name, command)
                return True
        return False
