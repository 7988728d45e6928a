"""Installation outcome models.

This module defines the per-tool outcome record and the InstallationRun
value returned by the engine. Runs are immutable; callers combine the
runs of separate calls with InstallationRun.merge().
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from setupctl.models.manager import PackageManagerProfile
from setupctl.models.system import SystemProfile


def utc_timestamp() -> str:
    """Current UTC time in ISO format."""
    return datetime.now(UTC).isoformat()


class InstallStatus(Enum):
    """Final install classification of a tool.

    Attributes:
        ALREADY_SATISFIED: Present before any install attempt.
        INSTALLED: Absent at entry, present after an install attempt.
        FAILED: Install attempts exhausted without the tool becoming present.
        MISSING: Absent and not attempted (verify-only runs).
    """

    ALREADY_SATISFIED = "already_satisfied"
    INSTALLED = "installed"
    FAILED = "failed"
    MISSING = "missing"

    @property
    def is_present(self) -> bool:
        """Check if the tool ended up present on the host."""
        return self in (InstallStatus.ALREADY_SATISFIED, InstallStatus.INSTALLED)


class VerificationStatus(Enum):
    """Result of the functional verification pass."""

    VERIFIED = "verified"
    NOT_VERIFIED = "not_verified"
    UNATTEMPTED = "unattempted"


@dataclass(frozen=True, slots=True)
class InstallationOutcome:
    """Outcome of processing a single tool.

    The verified field is only meaningful when status is ALREADY_SATISFIED
    or INSTALLED; otherwise it stays UNATTEMPTED.

    Attributes:
        tool: Generic tool name.
        category: Id of the owning category.
        status: Install classification.
        verified: Functional verification result.
        packages: Native identifiers requested (empty if no attempt was made).
        method: How the tool was installed ('batch', 'individual', 'alternative:<name>').
        hint: Remediation hint for failed or unverified tools.
    """

    tool: str
    category: str
    status: InstallStatus
    verified: VerificationStatus = VerificationStatus.UNATTEMPTED
    packages: tuple[str, ...] = ()
    method: str | None = None
    hint: str | None = None

    def __post_init__(self) -> None:
        """Validate outcome data after initialization."""
        if not self.status.is_present and self.verified != VerificationStatus.UNATTEMPTED:
            msg = f"Tool '{self.tool}' cannot be verified with status {self.status.value}"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        """Check if the install attempt failed."""
        return self.status == InstallStatus.FAILED

    @property
    def needs_attention(self) -> bool:
        """Check if the tool is failed, missing, or present but not working."""
        return (
            self.status in (InstallStatus.FAILED, InstallStatus.MISSING)
            or self.verified == VerificationStatus.NOT_VERIFIED
        )

    def with_verification(self, verified: bool, hint: str | None = None) -> InstallationOutcome:
        """Return a copy annotated with a verification result.

        The install status is never changed by verification.
        """
        return replace(
            self,
            verified=VerificationStatus.VERIFIED if verified else VerificationStatus.NOT_VERIFIED,
            hint=self.hint if verified else (hint or self.hint),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tool": self.tool,
            "category": self.category,
            "status": self.status.value,
            "verified": self.verified.value,
            "packages": list(self.packages),
            "method": self.method,
            "hint": self.hint,
        }


@dataclass(frozen=True, slots=True)
class RunCounts:
    """Aggregate counts for a set of outcomes."""

    total: int = 0
    already_satisfied: int = 0
    installed: int = 0
    failed: int = 0
    missing: int = 0
    verified: int = 0
    not_verified: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: tuple[InstallationOutcome, ...]) -> RunCounts:
        """Tally a sequence of outcomes."""
        statuses = [o.status for o in outcomes]
        verifications = [o.verified for o in outcomes]
        return cls(
            total=len(outcomes),
            already_satisfied=statuses.count(InstallStatus.ALREADY_SATISFIED),
            installed=statuses.count(InstallStatus.INSTALLED),
            failed=statuses.count(InstallStatus.FAILED),
            missing=statuses.count(InstallStatus.MISSING),
            verified=verifications.count(VerificationStatus.VERIFIED),
            not_verified=verifications.count(VerificationStatus.NOT_VERIFIED),
        )

    @property
    def present(self) -> int:
        """Tools present on the host after the run."""
        return self.already_satisfied + self.installed

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total": self.total,
            "already_satisfied": self.already_satisfied,
            "installed": self.installed,
            "failed": self.failed,
            "missing": self.missing,
            "verified": self.verified,
            "not_verified": self.not_verified,
        }


@dataclass(frozen=True, slots=True)
class InstallationRun:
    """Record of one engine call.

    Attributes:
        system: SystemProfile snapshot for the run.
        manager: PackageManagerProfile snapshot for the run.
        outcomes: Ordered per-tool outcomes.
        timestamp: ISO format timestamp when the run started.
        warnings: Soft warnings raised during the run (e.g., index refresh failure).
    """

    system: SystemProfile
    manager: PackageManagerProfile
    outcomes: tuple[InstallationOutcome, ...] = ()
    timestamp: str = field(default_factory=utc_timestamp)
    warnings: tuple[str, ...] = ()

    @property
    def counts(self) -> RunCounts:
        """Aggregate counts across all outcomes."""
        return RunCounts.from_outcomes(self.outcomes)

    def counts_for(self, category_id: str) -> RunCounts:
        """Aggregate counts for a single category."""
        return RunCounts.from_outcomes(tuple(o for o in self.outcomes if o.category == category_id))

    @property
    def categories(self) -> list[str]:
        """Category ids in the order they were processed."""
        return list(dict.fromkeys(o.category for o in self.outcomes))

    @property
    def failed_outcomes(self) -> list[InstallationOutcome]:
        """Outcomes whose install attempt failed."""
        return [o for o in self.outcomes if o.failed]

    @property
    def attention_outcomes(self) -> list[InstallationOutcome]:
        """Outcomes that are failed, missing, or not verified."""
        return [o for o in self.outcomes if o.needs_attention]

    @property
    def has_failures(self) -> bool:
        """Check if any tool failed to install."""
        return any(o.failed for o in self.outcomes)

    def outcome_for(self, tool: str) -> InstallationOutcome | None:
        """Return the outcome recorded for a tool, if any."""
        for outcome in self.outcomes:
            if outcome.tool == tool:
                return outcome
        return None

    def merge(self, other: InstallationRun) -> InstallationRun:
        """Combine two runs of the same session into one.

        Raises:
            ValueError: If the runs were produced for different profiles.
        """
        if other.system != self.system or other.manager != self.manager:
            msg = "Cannot merge runs from different system or manager profiles"
            raise ValueError(msg)
        return replace(
            self,
            outcomes=self.outcomes + other.outcomes,
            warnings=self.warnings + tuple(w for w in other.warnings if w not in self.warnings),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        from setupctl import __version__

        return {
            "timestamp": self.timestamp,
            "setupctl_version": __version__,
            "system": self.system.to_dict(),
            "package_manager": self.manager.to_dict(),
            "summary": self.counts.to_dict(),
            "categories": {c: self.counts_for(c).to_dict() for c in self.categories},
            "outcomes": [o.to_dict() for o in self.outcomes],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True, slots=True)
class PlannedInstall:
    """Dry-run entry describing what an install would do for one tool.

    Attributes:
        tool: Generic tool name.
        category: Id of the owning category.
        satisfied: True if the tool is already present.
        packages: Native identifiers that would be requested.
        batched: True if the tool would go through a combined request.
    """

    tool: str
    category: str
    satisfied: bool
    packages: tuple[str, ...] = ()
    batched: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tool": self.tool,
            "category": self.category,
            "satisfied": self.satisfied,
            "packages": list(self.packages),
            "batched": self.batched,
        }
