"""Shared Rich display functions for plans, runs and reporters.

Provides reusable table builders and summary printers for the install
and verify commands, and a reporter that renders engine progress.
"""

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from setupctl.core.session import save_run_report
from setupctl.engine.installer import InstallReporter
from setupctl.models.outcome import (
    InstallationOutcome,
    InstallationRun,
    InstallStatus,
    PlannedInstall,
)
from setupctl.models.registry import ToolCategory, ToolSpec
from setupctl.utils.formatting import (
    console,
    format_priority,
    format_status,
    format_verification,
    print_error,
    print_info,
    print_success,
    print_warning,
)


class ConsoleReporter(InstallReporter):
    """Reporter that prints category progress to the console."""

    def category_started(self, category: ToolCategory, candidates: list[ToolSpec]) -> None:
        if candidates:
            names = escape(", ".join(tool.name for tool in candidates))
            console.print(
                f"[header]>[/] [tool.name]{escape(category.id)}[/] "
                f"({format_priority(category.priority)}): installing {names}"
            )
        else:
            console.print(
                f"[header]>[/] [tool.name]{escape(category.id)}[/] "
                f"({format_priority(category.priority)}): [muted]nothing to install[/]"
            )

    def tool_finished(self, outcome: InstallationOutcome) -> None:
        tool = escape(outcome.tool)
        if outcome.failed:
            console.print(f"  [status.failed]✗[/] {tool} [muted]{escape(outcome.hint or '')}[/]")
        elif outcome.status == InstallStatus.INSTALLED:
            method = escape(outcome.method or "")
            console.print(f"  [status.installed]✓[/] {tool} [muted]({method})[/]")


def create_plan_table(planned: list[PlannedInstall]) -> Table:
    """Create a Rich table displaying a dry-run plan.

    Args:
        planned: Plan entries in processing order.

    Returns:
        Rich Table configured for plan display.
    """
    table = Table(
        title="Planned Installs (Dry Run)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category")
    table.add_column("Tool", no_wrap=True)
    table.add_column("Action", justify="center")
    table.add_column("Packages")

    for entry in planned:
        if entry.satisfied:
            action = "[status.satisfied]skip[/]"
        elif entry.batched:
            action = "[status.installed]+batch[/]"
        else:
            action = "[status.installed]+install[/]"
        table.add_row(
            f"[muted]{escape(entry.category)}[/]",
            escape(entry.tool),
            action,
            escape(" ".join(entry.packages)) or "[muted]-[/]",
        )
    return table


def create_results_table(run: InstallationRun, title: str = "Results") -> Table:
    """Create a Rich table displaying per-tool outcomes.

    Args:
        run: The run to display.
        title: Table title.

    Returns:
        Rich Table configured for outcome display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Category")
    table.add_column("Tool", no_wrap=True)
    table.add_column("Status")
    table.add_column("Verification")
    table.add_column("Packages", style="muted")

    for outcome in run.outcomes:
        table.add_row(
            f"[muted]{escape(outcome.category)}[/]",
            escape(outcome.tool),
            format_status(outcome.status),
            format_verification(outcome.verified),
            escape(" ".join(outcome.packages)) or "-",
        )
    return table


def print_run_summary(run: InstallationRun) -> None:
    """Print summary counts, warnings and the remediation list.

    Args:
        run: The run to summarize.
    """
    counts = run.counts
    parts = [f"{counts.total} tools"]
    if counts.already_satisfied:
        parts.append(f"[status.satisfied]{counts.already_satisfied} already satisfied[/]")
    if counts.installed:
        parts.append(f"[status.installed]{counts.installed} installed[/]")
    if counts.failed:
        parts.append(f"[status.failed]{counts.failed} failed[/]")
    if counts.missing:
        parts.append(f"[status.missing]{counts.missing} missing[/]")
    console.print(f"\nSummary: {', '.join(parts)}")
    console.print(
        f"Verification: [success]{counts.verified} verified[/], "
        f"[warning]{counts.not_verified} not verified[/]"
    )

    for warning in run.warnings:
        print_warning(warning)

    attention = run.attention_outcomes
    if not attention:
        print_success("All tools are present and working.")
        return

    console.print("\n[header]Needs attention:[/]")
    for outcome in attention:
        packages = escape(" ".join(outcome.packages))
        detail = f" [muted]({packages})[/]" if packages else ""
        hint = escape(outcome.hint or "unknown problem")
        console.print(f"  - [tool.name]{escape(outcome.tool)}[/]{detail}: {hint}")


def export_run(run: InstallationRun, export_path: Path) -> None:
    """Export a run to a JSON file, exiting on failure.

    Args:
        run: The run to export.
        export_path: Destination file.

    Raises:
        typer.Exit: If the path is a directory or cannot be written.
    """
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)
    try:
        save_run_report(run, export_path)
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
    print_info(f"Run report exported to {export_path}")


def record_last_run(run: InstallationRun) -> None:
    """Keep a copy of the run in the state directory."""
    try:
        save_run_report(run)
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not record run report: {e}")
