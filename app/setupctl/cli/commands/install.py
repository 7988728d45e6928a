"""Install command implementation.

Installs every catalogued tool, or one category, with batch installs,
individual fallback and functional verification.
"""

from pathlib import Path
from typing import Annotated

import typer

from setupctl.cli.display import (
    ConsoleReporter,
    create_plan_table,
    create_results_table,
    export_run,
    print_run_summary,
    record_last_run,
)
from setupctl.core.session import require_session
from setupctl.models.outcome import PlannedInstall
from setupctl.models.registry import CategoryNotFoundError
from setupctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Install tools from the registry.",
    invoke_without_command=True,
)


def _print_plan_summary(planned: list[PlannedInstall]) -> None:
    """Print a summary of a dry-run plan.

    Args:
        planned: Plan entries.
    """
    pending = [p for p in planned if not p.satisfied]
    batched = sum(1 for p in pending if p.batched)
    console.print(
        f"\nSummary: [status.installed]{len(pending)} to install[/] "
        f"([muted]{batched} batched[/]), "
        f"[status.satisfied]{len(planned) - len(pending)} already satisfied[/]"
    )


def _confirm_install(tool_count: int, manager_id: str) -> bool:
    """Prompt user to confirm the install.

    Args:
        tool_count: Number of tools to install.
        manager_id: Package manager that will be used.

    Returns:
        True if user confirms, False otherwise.
    """
    return typer.confirm(
        f"\nInstall {tool_count} tool(s) with {manager_id}?",
        default=False,
    )


@app.callback(invoke_without_command=True)
def install_tools(
    ctx: typer.Context,
    category: Annotated[
        str | None,
        typer.Option(
            "--category",
            "-c",
            help="Install a single category instead of all.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be installed without making changes.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
    no_refresh: Annotated[
        bool,
        typer.Option(
            "--no-refresh",
            help="Skip the package index refresh.",
        ),
    ] = False,
    registry_path: Annotated[
        Path | None,
        typer.Option(
            "--registry",
            "-r",
            help="Tool registry file to use.",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export the run report to a JSON file.",
        ),
    ] = None,
) -> None:
    """Install tools from the registry.

    Categories are processed high priority first. A failed tool never
    stops the run; failures are listed with remediation hints at the end
    and the command exits with status 1.

    Examples:
        setupctl install --dry-run                   # Preview
        setupctl install --yes                       # Install everything
        setupctl install -c network_tools            # One category
        setupctl install --export run.json           # Save the report
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    session = require_session(
        registry_path=registry_path,
        reporter=ConsoleReporter(),
        refresh_index=False if no_refresh else None,
    )
    print_info(f"Detected {session.system.display_name} using {session.manager.id}")

    try:
        planned = session.engine.plan(category)
    except CategoryNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    pending = [p for p in planned if not p.satisfied]

    if dry_run:
        console.print(create_plan_table(planned))
        _print_plan_summary(planned)
        print_info("\nDry run - no changes made.")
        return

    if not pending:
        print_success(f"All {len(planned)} tool(s) are already installed.")
        run = session.engine.verify_only(category)
    else:
        if not yes and not _confirm_install(len(pending), session.manager.id):
            print_info("Aborted.")
            raise typer.Exit(code=0)

        if category is None:
            run = session.engine.install_all()
        else:
            run = session.engine.install_category(category)

    console.print(create_results_table(run))
    print_run_summary(run)
    record_last_run(run)

    if export_path is not None:
        export_run(run, export_path)

    if run.has_failures:
        raise typer.Exit(code=1)
