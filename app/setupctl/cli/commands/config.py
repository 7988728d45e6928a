"""Config command implementation.

Shows the effective settings and writes a default settings file.
"""

from typing import Annotated

import typer
from rich.table import Table

from setupctl.core.paths import get_settings_path
from setupctl.core.settings import Settings, SettingsError, load_settings, save_settings
from setupctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    settings_path = get_settings_path()
    source = str(settings_path) if settings_path.exists() else "defaults"

    table = Table(title=f"Settings ({source})", border_style="border", header_style="bold_header")
    table.add_column("Setting", style="bold_header")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    target = get_settings_path()
    if target.exists() and not force:
        print_error(f"Settings already exist: {target}")
        print_info("Use --force to overwrite them.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), target)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
