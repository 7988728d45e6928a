"""Detect command implementation.

Shows the detected system profile and the resolved package manager.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from setupctl.detection.base import DetectionError
from setupctl.detection.detector import Detector
from setupctl.managers.resolver import UnsupportedManagerError, resolve_manager
from setupctl.models.system import SupportLevel
from setupctl.utils.formatting import console, print_error, print_warning

app = typer.Typer(
    help="Show the detected system and package manager.",
    invoke_without_command=True,
)

_SUPPORT_STYLE: dict[SupportLevel, str] = {
    SupportLevel.FULL: "success",
    SupportLevel.PARTIAL: "info",
    SupportLevel.EXPERIMENTAL: "warning",
    SupportLevel.UNSUPPORTED: "error",
}


@app.callback(invoke_without_command=True)
def detect_system(
    ctx: typer.Context,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Detect the host system and its package manager."""
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    try:
        system = Detector().detect()
    except DetectionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    manager_id: str | None
    try:
        manager_id = resolve_manager(system.family).id
    except UnsupportedManagerError as e:
        print_warning(str(e))
        manager_id = None

    if as_json:
        data = {**system.to_dict(), "package_manager": manager_id}
        console.print_json(json.dumps(data))
        return

    table = Table(show_header=False, border_style="border", title="Detected System")
    table.add_column("Field", style="bold_header")
    table.add_column("Value")
    table.add_row("Distribution", escape(system.display_name))
    table.add_row("ID", escape(system.id))
    table.add_row("Version", escape(system.version))
    table.add_row("Codename", escape(system.codename or "") or "[muted]-[/]")
    if system.build:
        table.add_row("Build", escape(system.build))
    table.add_row("Family", system.family.value)
    table.add_row("Architecture", system.architecture)
    style = _SUPPORT_STYLE[system.support_level]
    table.add_row("Support", f"[{style}]{system.support_level.value}[/]")
    table.add_row("Package manager", manager_id or "[error]none found[/]")
    console.print(table)

    if manager_id is None:
        raise typer.Exit(code=1)
