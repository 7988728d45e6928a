"""Unit tests for FunctionalVerifier."""

from unittest.mock import MagicMock

from setupctl.engine.translator import NameTranslator
from setupctl.engine.verification import FunctionalVerifier
from setupctl.models.registry import ToolRegistry
from setupctl.utils.shell import CommandResult


def _verifier(
    registry: ToolRegistry, runner: MagicMock, *commands: str, package_present: bool = False
) -> FunctionalVerifier:
    translator = NameTranslator(
        registry,
        command_lookup=lambda name: name in commands,
        package_query=lambda package: package_present,
    )
    return FunctionalVerifier(registry, translator, timeout=5.0, runner=runner)


class TestFunctionalVerifier:
    """Tests for FunctionalVerifier.verify method."""

    def test_probe_success(self, sample_registry: ToolRegistry) -> None:
        """A zero exit status verifies the tool."""
        runner = MagicMock(return_value=CommandResult(stdout="git 2.43", stderr="", returncode=0))

        assert _verifier(sample_registry, runner).verify("git", "apt") == (True, None)
        runner.assert_called_once_with(["git", "--version"], timeout=5.0)

    def test_probe_failure_hint(self, sample_registry: ToolRegistry) -> None:
        """A failing probe explains itself."""
        runner = MagicMock(
            return_value=CommandResult(stdout="", stderr="Segmentation fault", returncode=139)
        )

        working, hint = _verifier(sample_registry, runner).verify("git", "apt")

        assert not working
        assert hint == "functional probe 'git --version' failed: Segmentation fault"

    def test_probe_failure_without_stderr(self, sample_registry: ToolRegistry) -> None:
        """The exit code is reported when stderr is empty."""
        runner = MagicMock(return_value=CommandResult(stdout="", stderr="", returncode=2))

        _, hint = _verifier(sample_registry, runner).verify("git", "apt")

        assert hint == "functional probe 'git --version' failed: exit code 2"

    def test_no_probe_falls_back_to_presence(self, sample_registry: ToolRegistry) -> None:
        """Tools without a probe are verified by presence."""
        runner = MagicMock()

        assert _verifier(sample_registry, runner, "vim").verify("vim", "apt") == (True, None)
        runner.assert_not_called()

    def test_no_probe_command_missing(self, sample_registry: ToolRegistry) -> None:
        """A missing command is reported."""
        working, hint = _verifier(sample_registry, MagicMock()).verify("vim", "apt")

        assert not working
        assert hint == "package reported installed but command not found"

    def test_unknown_tool(self, sample_registry: ToolRegistry) -> None:
        """Unknown tools use the default presence rule."""
        verifier = _verifier(sample_registry, MagicMock(), "htop")
        assert verifier.verify("htop", "apt") == (True, None)
