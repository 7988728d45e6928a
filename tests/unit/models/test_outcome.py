"""Unit tests for installation outcome models."""

from dataclasses import replace

import pytest
from setupctl.models.manager import PackageManagerProfile
from setupctl.models.outcome import (
    InstallationOutcome,
    InstallationRun,
    InstallStatus,
    PlannedInstall,
    VerificationStatus,
)
from setupctl.models.system import SystemProfile


def _outcome(tool: str, category: str, status: InstallStatus, **kwargs: object) -> InstallationOutcome:
    return InstallationOutcome(tool=tool, category=category, status=status, **kwargs)  # type: ignore[arg-type]


class TestInstallationOutcome:
    """Tests for InstallationOutcome dataclass."""

    def test_failed_cannot_be_verified(self) -> None:
        """Verification is only meaningful for present tools."""
        with pytest.raises(ValueError, match="cannot be verified"):
            _outcome("git", "core", InstallStatus.FAILED, verified=VerificationStatus.VERIFIED)

    def test_with_verification_keeps_status(self) -> None:
        """NOT_VERIFIED never turns INSTALLED into FAILED."""
        outcome = _outcome("git", "core", InstallStatus.INSTALLED)

        annotated = outcome.with_verification(False, "probe failed")

        assert annotated.status == InstallStatus.INSTALLED
        assert annotated.verified == VerificationStatus.NOT_VERIFIED
        assert annotated.hint == "probe failed"

    def test_with_verification_success(self) -> None:
        """A passing probe marks VERIFIED."""
        outcome = _outcome("git", "core", InstallStatus.ALREADY_SATISFIED)
        assert outcome.with_verification(True).verified == VerificationStatus.VERIFIED

    def test_needs_attention(self) -> None:
        """Failed, missing and unverified tools need attention."""
        assert _outcome("a", "c", InstallStatus.FAILED).needs_attention
        assert _outcome("a", "c", InstallStatus.MISSING).needs_attention
        assert _outcome("a", "c", InstallStatus.INSTALLED).with_verification(False).needs_attention
        assert not _outcome("a", "c", InstallStatus.INSTALLED).with_verification(True).needs_attention

    def test_to_dict(self) -> None:
        """to_dict serializes enum values and packages."""
        outcome = _outcome(
            "netcat",
            "network",
            InstallStatus.INSTALLED,
            packages=("netcat-openbsd",),
            method="individual",
        )
        data = outcome.to_dict()
        assert data["status"] == "installed"
        assert data["verified"] == "unattempted"
        assert data["packages"] == ["netcat-openbsd"]


class TestInstallationRun:
    """Tests for InstallationRun dataclass."""

    @pytest.fixture
    def run(
        self, debian_system: SystemProfile, apt_profile: PackageManagerProfile
    ) -> InstallationRun:
        """Run with outcomes in two categories."""
        return InstallationRun(
            system=debian_system,
            manager=apt_profile,
            outcomes=(
                _outcome("git", "core", InstallStatus.ALREADY_SATISFIED).with_verification(True),
                _outcome("vim", "core", InstallStatus.INSTALLED).with_verification(False),
                _outcome("jq", "extras", InstallStatus.FAILED),
            ),
            warnings=("index refresh failed",),
        )

    def test_counts(self, run: InstallationRun) -> None:
        """counts tallies statuses and verification results."""
        counts = run.counts
        assert counts.total == 3
        assert counts.already_satisfied == 1
        assert counts.installed == 1
        assert counts.failed == 1
        assert counts.verified == 1
        assert counts.not_verified == 1
        assert counts.present == 2

    def test_counts_for_category(self, run: InstallationRun) -> None:
        """counts_for only counts the given category."""
        assert run.counts_for("core").total == 2
        assert run.counts_for("core").failed == 0
        assert run.counts_for("extras").failed == 1

    def test_categories_in_processing_order(self, run: InstallationRun) -> None:
        """categories lists ids in first-seen order."""
        assert run.categories == ["core", "extras"]

    def test_has_failures(self, run: InstallationRun) -> None:
        """has_failures reflects FAILED outcomes."""
        assert run.has_failures
        assert [o.tool for o in run.failed_outcomes] == ["jq"]
        assert [o.tool for o in run.attention_outcomes] == ["vim", "jq"]

    def test_outcome_for(self, run: InstallationRun) -> None:
        """outcome_for finds a tool's outcome."""
        outcome = run.outcome_for("vim")
        assert outcome is not None
        assert outcome.status == InstallStatus.INSTALLED
        assert run.outcome_for("missing") is None

    def test_merge(self, run: InstallationRun) -> None:
        """merge concatenates outcomes and de-duplicates warnings."""
        other = replace(
            run,
            outcomes=(_outcome("lsof", "monitoring", InstallStatus.INSTALLED),),
            warnings=("index refresh failed", "other warning"),
        )

        merged = run.merge(other)

        assert len(merged.outcomes) == 4
        assert merged.warnings == ("index refresh failed", "other warning")
        assert len(run.outcomes) == 3

    def test_merge_rejects_other_profile(self, run: InstallationRun) -> None:
        """Runs from different systems cannot be merged."""
        other = replace(run, system=replace(run.system, id="debian"))
        with pytest.raises(ValueError, match="different system"):
            run.merge(other)

    def test_to_dict(self, run: InstallationRun) -> None:
        """to_dict includes profiles, summary and per-category counts."""
        data = run.to_dict()
        assert data["system"]["id"] == "ubuntu"
        assert data["package_manager"]["id"] == "apt"
        assert data["summary"]["total"] == 3
        assert data["categories"]["extras"]["failed"] == 1
        assert data["warnings"] == ["index refresh failed"]
        assert "setupctl_version" in data


class TestPlannedInstall:
    """Tests for PlannedInstall dataclass."""

    def test_to_dict(self) -> None:
        """to_dict lists packages."""
        entry = PlannedInstall(
            tool="git", category="core", satisfied=False, packages=("git",), batched=True
        )
        assert entry.to_dict() == {
            "tool": "git",
            "category": "core",
            "satisfied": False,
            "packages": ["git"],
            "batched": True,
        }
