"""Registry command implementation.

Shows which tool registry is in effect and writes an editable copy to
the user config directory.
"""

from pathlib import Path
from typing import Annotated

import typer

from setupctl.core.paths import get_user_registry_path
from setupctl.registry.loader import (
    RegistryError,
    get_active_registry_path,
    get_bundled_registry_path,
    load_registry,
    save_registry,
)
from setupctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the tool registry.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def path(
    registry_path: Annotated[
        Path | None,
        typer.Option(
            "--registry",
            "-r",
            help="Tool registry file to use.",
        ),
    ] = None,
) -> None:
    """Show which registry file is used."""
    active = get_active_registry_path(registry_path)
    console.print(str(active))
    if Path(get_bundled_registry_path()) == active:
        print_info("Using the bundled registry. Run 'setupctl registry init' to customize it.")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing user registry.",
        ),
    ] = False,
) -> None:
    """Write the bundled registry to the user config directory."""
    target = get_user_registry_path()
    if target.exists() and not force:
        print_error(f"Registry already exists: {target}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        registry = load_registry(Path(get_bundled_registry_path()))
        saved = save_registry(registry, target)
    except RegistryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Registry written to {saved}")
    print_info(f"{len(registry.categories)} categories, {registry.tool_count} tools")
