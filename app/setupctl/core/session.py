"""Session assembly and run reports.

A session binds the detected system, the resolved package manager and
the loaded registry to one engine. Detection and resolution happen once
per session; nothing downstream re-detects.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from setupctl.core.paths import get_last_run_path
from setupctl.core.settings import Settings
from setupctl.detection.detector import Detector
from setupctl.engine.installer import InstallationEngine, InstallReporter
from setupctl.engine.translator import NameTranslator
from setupctl.engine.verification import FunctionalVerifier
from setupctl.managers.operator import PackageOperator
from setupctl.managers.resolver import resolve_manager
from setupctl.registry.loader import load_registry

if TYPE_CHECKING:
    from setupctl.models.manager import PackageManagerProfile
    from setupctl.models.outcome import InstallationRun
    from setupctl.models.registry import ToolRegistry
    from setupctl.models.system import SystemProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Session:
    """Collaborators for one invocation.

    Attributes:
        system: Detected host profile.
        manager: Resolved package manager profile.
        registry: Loaded tool registry.
        engine: Engine wired to the above.
    """

    system: SystemProfile
    manager: PackageManagerProfile
    registry: ToolRegistry
    engine: InstallationEngine


def open_session(
    settings: Settings,
    *,
    registry_path: Path | None = None,
    reporter: InstallReporter | None = None,
    refresh_index: bool | None = None,
    detector: Detector | None = None,
) -> Session:
    """Detect the host, resolve its manager and build an engine.

    The registry is loaded first so a broken registry aborts before any
    command runs on the host.

    Args:
        settings: Runtime settings.
        registry_path: Explicit registry file, if any.
        reporter: Progress receiver for the engine.
        refresh_index: Overrides settings.refresh_index when not None.
        detector: Detector to use. Defaults to Detector().

    Raises:
        RegistryError: If the registry fails to load.
        DetectionError: If the host cannot be identified.
        UnsupportedManagerError: If no package manager is found.
    """
    registry = load_registry(registry_path)
    system = (detector or Detector()).detect()
    manager = resolve_manager(system.family)

    operator = PackageOperator(
        manager,
        use_sudo=settings.use_sudo,
        retry_attempts=settings.retry_attempts,
        retry_delay=settings.retry_delay_seconds,
    )
    translator = NameTranslator(registry, package_query=operator.is_installed)
    verifier = FunctionalVerifier(
        registry,
        translator,
        timeout=float(settings.probe_timeout_seconds),
    )
    engine = InstallationEngine(
        registry,
        system,
        operator,
        translator,
        verifier,
        reporter=reporter,
        refresh_index=settings.refresh_index if refresh_index is None else refresh_index,
    )
    return Session(system=system, manager=manager, registry=registry, engine=engine)


def save_run_report(run: InstallationRun, path: Path | None = None) -> Path:
    """Write a run as JSON.

    Args:
        run: The run to write.
        path: Destination. If None, uses the state directory's last-run.json.

    Returns:
        Path where the report was written.

    Raises:
        OSError: If the file cannot be written.
    """
    report_path = path or get_last_run_path()
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json.dumps(run.to_dict(), indent=2) + "\n", encoding="utf-8")
    logger.debug("Wrote run report to %s", report_path)
    return report_path


def require_session(
    *,
    registry_path: Path | None = None,
    reporter: InstallReporter | None = None,
    refresh_index: bool | None = None,
) -> Session:
    """Open a session or exit with a helpful error message.

    This is a convenience wrapper around open_session() for CLI commands.
    It loads settings, then converts the run-aborting errors into printed
    messages and a non-zero exit.

    Raises:
        typer.Exit: If settings, registry, detection or resolution fail.
    """
    import typer

    from setupctl.core.settings import SettingsError, load_settings
    from setupctl.detection.base import DetectionError
    from setupctl.managers.resolver import UnsupportedManagerError
    from setupctl.registry.loader import RegistryError
    from setupctl.utils.formatting import print_error, print_info

    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e

    try:
        return open_session(
            settings,
            registry_path=registry_path,
            reporter=reporter,
            refresh_index=refresh_index,
        )
    except RegistryError as e:
        print_error(f"Failed to load tool registry: {e}")
        raise typer.Exit(code=1) from e
    except DetectionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except UnsupportedManagerError as e:
        print_error(str(e))
        print_info("Install a supported package manager and try again.")
        raise typer.Exit(code=1) from e
