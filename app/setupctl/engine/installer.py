"""Batch installation engine.

Processes tool categories with a combined install request where it is
worthwhile, falling back to individual attempts so that no candidate is
ever abandoned, then runs a separate functional verification pass.

Per-category procedure:
1. Partition tools into satisfied and candidates by the presence check.
2. With more than one and at most batch_size candidates, issue one
   combined install request. On success every candidate is re-checked
   individually; on failure every candidate is attempted individually.
3. Otherwise attempt each candidate individually, trying its alternatives
   in order until presence is satisfied.
4. Verify every present tool. Verification never changes install status.

Execution is strictly sequential; exactly one manager command is in
flight at any moment.
"""

import logging

from setupctl.engine.translator import NameTranslator
from setupctl.engine.verification import FunctionalVerifier
from setupctl.managers.operator import PackageOperator
from setupctl.models.outcome import (
    InstallationOutcome,
    InstallationRun,
    InstallStatus,
    PlannedInstall,
    utc_timestamp,
)
from setupctl.models.registry import (
    PresenceMethod,
    ToolCategory,
    ToolRegistry,
    ToolSpec,
)
from setupctl.models.system import SystemProfile
from setupctl.utils.shell import CommandResult

logger = logging.getLogger(__name__)

METHOD_BATCH = "batch"
METHOD_INDIVIDUAL = "individual"


class InstallReporter:
    """Receiver for engine progress events.

    All hooks are no-ops; subclasses override the ones they need.
    """

    def category_started(self, category: ToolCategory, candidates: list[ToolSpec]) -> None:
        """Called before a category is processed."""

    def tool_finished(self, outcome: InstallationOutcome) -> None:
        """Called once a tool's install status is final."""

    def tool_verified(self, outcome: InstallationOutcome) -> None:
        """Called after the functional probe of a present tool."""

    def category_finished(
        self, category: ToolCategory, outcomes: list[InstallationOutcome]
    ) -> None:
        """Called after a category, including verification, is complete."""


class LoggingReporter(InstallReporter):
    """Reporter that writes engine events to the module logger."""

    def category_started(self, category: ToolCategory, candidates: list[ToolSpec]) -> None:
        logger.info(
            "Processing category %s (%s priority): %d tools, %d to install",
            category.id,
            category.priority.value,
            len(category.tools),
            len(candidates),
        )

    def tool_finished(self, outcome: InstallationOutcome) -> None:
        if outcome.failed:
            logger.warning("Failed to install %s: %s", outcome.tool, outcome.hint)
        else:
            logger.info("%s: %s", outcome.tool, outcome.status.value)

    def tool_verified(self, outcome: InstallationOutcome) -> None:
        logger.debug("%s verification: %s", outcome.tool, outcome.verified.value)

    def category_finished(
        self, category: ToolCategory, outcomes: list[InstallationOutcome]
    ) -> None:
        failed = sum(1 for o in outcomes if o.failed)
        logger.info(
            "Category %s complete: %d/%d present",
            category.id,
            len(outcomes) - failed,
            len(outcomes),
        )


class InstallationEngine:
    """Install and verify the tools of a registry on one host.

    The system and manager profiles are fixed for the engine's lifetime.
    Each public call returns a fresh InstallationRun; the engine keeps no
    state between calls.

    Example:
        >>> engine = InstallationEngine(registry, system, operator, translator, verifier)
        >>> run = engine.install_category("core_development")
        >>> run.counts.failed
        0
    """

    def __init__(
        self,
        registry: ToolRegistry,
        system: SystemProfile,
        operator: PackageOperator,
        translator: NameTranslator,
        verifier: FunctionalVerifier,
        *,
        reporter: InstallReporter | None = None,
        refresh_index: bool = True,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Tool catalogue.
            system: Detected host profile.
            operator: Operator of the resolved package manager.
            translator: Name translator bound to the same manager.
            verifier: Functional verifier.
            reporter: Progress receiver. Defaults to LoggingReporter.
            refresh_index: Refresh the package index before installing.
        """
        self._registry = registry
        self._system = system
        self._operator = operator
        self._manager = operator.manager
        self._translator = translator
        self._verifier = verifier
        self._reporter = reporter or LoggingReporter()
        self._refresh_index = refresh_index

    def install_all(self) -> InstallationRun:
        """Install every category, high priority first.

        Returns:
            InstallationRun with one outcome per catalogued tool.
        """
        return self._install(self._registry.ordered_categories())

    def install_category(self, category_id: str) -> InstallationRun:
        """Install a single category.

        Raises:
            CategoryNotFoundError: If the id is unknown. Nothing is executed.
        """
        category = self._registry.get_category(category_id)
        return self._install([category])

    def verify_only(self, category_id: str | None = None) -> InstallationRun:
        """Check presence and run functional probes without installing.

        Absent tools are reported as MISSING.

        Raises:
            CategoryNotFoundError: If category_id is unknown.
        """
        started = utc_timestamp()
        categories = self._select(category_id)
        outcomes: list[InstallationOutcome] = []
        for category in categories:
            self._reporter.category_started(category, [])
            results: list[InstallationOutcome] = []
            for tool in category.tools:
                if self._is_present(tool.name):
                    outcome = InstallationOutcome(
                        tool=tool.name,
                        category=category.id,
                        status=InstallStatus.ALREADY_SATISFIED,
                    )
                    self._reporter.tool_finished(outcome)
                    outcome = self._verify(outcome)
                else:
                    outcome = InstallationOutcome(
                        tool=tool.name,
                        category=category.id,
                        status=InstallStatus.MISSING,
                        packages=tuple(self._native(tool.name)),
                        hint="not installed",
                    )
                    self._reporter.tool_finished(outcome)
                results.append(outcome)
            self._reporter.category_finished(category, results)
            outcomes.extend(results)
        return InstallationRun(
            system=self._system,
            manager=self._manager,
            outcomes=tuple(outcomes),
            timestamp=started,
        )

    def plan(self, category_id: str | None = None) -> list[PlannedInstall]:
        """Describe what an install would do without installing anything.

        Only presence checks are executed.

        Raises:
            CategoryNotFoundError: If category_id is unknown.
        """
        planned: list[PlannedInstall] = []
        for category in self._select(category_id):
            satisfied, candidates = self._partition(category)
            batched = self._use_batch(category, candidates)
            for tool in category.tools:
                is_satisfied = tool in satisfied
                planned.append(
                    PlannedInstall(
                        tool=tool.name,
                        category=category.id,
                        satisfied=is_satisfied,
                        packages=() if is_satisfied else tuple(self._native(tool.name)),
                        batched=batched and not is_satisfied,
                    )
                )
        return planned

    # =========================================================================
    # Internals
    # =========================================================================

    def _select(self, category_id: str | None) -> list[ToolCategory]:
        if category_id is None:
            return self._registry.ordered_categories()
        return [self._registry.get_category(category_id)]

    def _install(self, categories: list[ToolCategory]) -> InstallationRun:
        started = utc_timestamp()
        warnings = self._refresh()
        outcomes: list[InstallationOutcome] = []
        for category in categories:
            outcomes.extend(self._process_category(category))
        return InstallationRun(
            system=self._system,
            manager=self._manager,
            outcomes=tuple(outcomes),
            timestamp=started,
            warnings=warnings,
        )

    def _refresh(self) -> tuple[str, ...]:
        """Refresh the package index. Failure is a warning, not an error."""
        if not self._refresh_index:
            return ()
        result = self._operator.refresh_index()
        if result.success:
            return ()
        detail = result.error_summary or f"exit code {result.returncode}"
        message = f"Package index refresh failed ({detail}); continuing with a stale index"
        logger.warning("%s", message)
        return (message,)

    def _process_category(self, category: ToolCategory) -> list[InstallationOutcome]:
        satisfied, candidates = self._partition(category)
        self._reporter.category_started(category, candidates)

        results: dict[str, InstallationOutcome] = {}
        for tool in satisfied:
            results[tool.name] = InstallationOutcome(
                tool=tool.name,
                category=category.id,
                status=InstallStatus.ALREADY_SATISFIED,
            )

        if self._use_batch(category, candidates):
            results.update(self._attempt_batch(candidates))
        else:
            for tool in candidates:
                results[tool.name] = self._attempt_individual(tool)

        for tool in category.tools:
            self._reporter.tool_finished(results[tool.name])

        outcomes = [self._verify(results[tool.name]) for tool in category.tools]
        self._reporter.category_finished(category, outcomes)
        return outcomes

    def _partition(self, category: ToolCategory) -> tuple[list[ToolSpec], list[ToolSpec]]:
        satisfied: list[ToolSpec] = []
        candidates: list[ToolSpec] = []
        for tool in category.tools:
            if self._is_present(tool.name):
                satisfied.append(tool)
            else:
                candidates.append(tool)
        return satisfied, candidates

    @staticmethod
    def _use_batch(category: ToolCategory, candidates: list[ToolSpec]) -> bool:
        return 1 < len(candidates) <= category.batch_size

    def _attempt_batch(self, candidates: list[ToolSpec]) -> dict[str, InstallationOutcome]:
        """Install candidates in one request, falling back to individual attempts."""
        native = {tool.name: self._native(tool.name) for tool in candidates}
        packages = list(dict.fromkeys(p for ids in native.values() for p in ids))

        logger.debug("Batch installing %s", ", ".join(packages))
        result = self._operator.install(packages)

        if not result.success:
            logger.info(
                "Batch install failed, falling back to individual installs for %s",
                ", ".join(tool.name for tool in candidates),
            )
            return {tool.name: self._attempt_individual(tool) for tool in candidates}

        outcomes: dict[str, InstallationOutcome] = {}
        for tool in candidates:
            present = self._is_present(tool.name)
            outcomes[tool.name] = InstallationOutcome(
                tool=tool.name,
                category=tool.category,
                status=InstallStatus.INSTALLED if present else InstallStatus.FAILED,
                packages=tuple(native[tool.name]),
                method=METHOD_BATCH,
                hint=None if present else self._absent_hint(tool),
            )
        return outcomes

    def _attempt_individual(self, tool: ToolSpec) -> InstallationOutcome:
        """Install one tool, then its alternatives, until it is present."""
        packages = self._native(tool.name)
        result = self._operator.install(packages)
        if result.success and self._is_present(tool.name):
            return InstallationOutcome(
                tool=tool.name,
                category=tool.category,
                status=InstallStatus.INSTALLED,
                packages=tuple(packages),
                method=METHOD_INDIVIDUAL,
            )
        hint = self._failure_hint(tool, result)

        for alternative in tool.alternatives:
            alt_packages = self._native(alternative)
            logger.info("Trying alternative %s for %s", alternative, tool.name)
            alt_result = self._operator.install(alt_packages)
            if alt_result.success and self._is_present(tool.name):
                return InstallationOutcome(
                    tool=tool.name,
                    category=tool.category,
                    status=InstallStatus.INSTALLED,
                    packages=tuple(alt_packages),
                    method=f"alternative:{alternative}",
                )

        return InstallationOutcome(
            tool=tool.name,
            category=tool.category,
            status=InstallStatus.FAILED,
            packages=tuple(packages),
            method=METHOD_INDIVIDUAL,
            hint=hint,
        )

    def _verify(self, outcome: InstallationOutcome) -> InstallationOutcome:
        if not outcome.status.is_present:
            return outcome
        working, hint = self._verifier.verify(outcome.tool, self._manager.id)
        verified = outcome.with_verification(working, hint)
        self._reporter.tool_verified(verified)
        return verified

    def _failure_hint(self, tool: ToolSpec, result: CommandResult) -> str:
        if result.success:
            return self._absent_hint(tool)
        detail = result.error_summary or f"exit code {result.returncode}"
        return f"package manager reported failure: {detail}"

    def _absent_hint(self, tool: ToolSpec) -> str:
        rule = tool.presence_for(self._manager.id)
        if rule.method == PresenceMethod.PACKAGE_QUERY:
            return "package reported installed but not found in package database"
        return "package reported installed but command not found"

    def _native(self, generic_name: str) -> list[str]:
        return self._translator.native_identifiers(generic_name, self._manager.id)

    def _is_present(self, generic_name: str) -> bool:
        return self._translator.is_present(generic_name, self._manager.id)
