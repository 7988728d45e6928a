"""Functional verification.

Presence is not proof of correct operation. The verifier runs a
tool-specific probe, typically a version query, and falls back to the
presence check when no probe is registered.
"""

import logging
from collections.abc import Callable

from setupctl.engine.translator import NameTranslator
from setupctl.models.registry import PresenceMethod, ToolRegistry
from setupctl.utils.shell import CommandResult, try_run_command

logger = logging.getLogger(__name__)

ProbeRunner = Callable[..., CommandResult]


class FunctionalVerifier:
    """Run functional probes for present tools."""

    def __init__(
        self,
        registry: ToolRegistry,
        translator: NameTranslator,
        *,
        timeout: float = 30.0,
        runner: ProbeRunner = try_run_command,
    ) -> None:
        self._registry = registry
        self._translator = translator
        self._timeout = timeout
        self._runner = runner

    def verify(self, generic_name: str, manager_id: str) -> tuple[bool, str | None]:
        """Probe a tool.

        Args:
            generic_name: Generic tool name.
            manager_id: Id of the session's package manager.

        Returns:
            Tuple of (working, hint). The hint explains a failed probe.
        """
        tool = self._registry.find_tool(generic_name)
        probe = tool.probe_for(manager_id) if tool is not None else None

        if probe is None:
            if self._translator.is_present(generic_name, manager_id):
                return True, None
            rule = self._translator.presence_rule(generic_name, manager_id)
            if rule.method == PresenceMethod.PACKAGE_QUERY:
                return False, "package not found in package database"
            return False, "package reported installed but command not found"

        result = self._runner(probe, timeout=self._timeout)
        if result.success:
            logger.debug("Probe for %s succeeded: %s", generic_name, " ".join(probe))
            return True, None

        detail = result.error_summary or f"exit code {result.returncode}"
        logger.debug("Probe for %s failed: %s", generic_name, detail)
        return False, f"functional probe '{' '.join(probe)}' failed: {detail}"
