"""Verify command implementation.

Checks presence and runs functional probes without installing anything.
"""

from pathlib import Path
from typing import Annotated

import typer

from setupctl.cli.display import create_results_table, export_run, print_run_summary
from setupctl.core.session import require_session
from setupctl.models.registry import CategoryNotFoundError
from setupctl.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Verify installed tools without installing.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def verify_tools(
    ctx: typer.Context,
    category: Annotated[
        str | None,
        typer.Option(
            "--category",
            "-c",
            help="Verify a single category instead of all.",
        ),
    ] = None,
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
            help="Export the verification report to a JSON file.",
        ),
    ] = None,
) -> None:
    """Verify tools from the registry.

    Exits with status 1 if any tool is missing or fails its probe.

    Examples:
        setupctl verify
        setupctl verify -c productivity_tools
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    session = require_session(registry_path=registry_path, refresh_index=False)
    print_info(f"Detected {session.system.display_name} using {session.manager.id}")

    try:
        run = session.engine.verify_only(category)
    except CategoryNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_results_table(run, title="Verification"))
    print_run_summary(run)

    if export_path is not None:
        export_run(run, export_path)

    if run.attention_outcomes:
        raise typer.Exit(code=1)
