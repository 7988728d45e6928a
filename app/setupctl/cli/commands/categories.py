"""Categories command implementation.

Lists the registry's categories. This is a pure registry read; the host
is not inspected.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from setupctl.registry.loader import RegistryError, get_active_registry_path, load_registry
from setupctl.utils.formatting import console, format_priority, print_error

app = typer.Typer(
    help="List tool categories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_categories(
    ctx: typer.Context,
    registry_path: Annotated[
        Path | None,
        typer.Option(
            "--registry",
            "-r",
            help="Tool registry file to use.",
        ),
    ] = None,
) -> None:
    """List tool categories in installation order."""
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    try:
        registry = load_registry(registry_path)
    except RegistryError as e:
        print_error(f"Failed to load tool registry: {e}")
        raise typer.Exit(code=1) from e

    table = Table(
        title=escape(f"Tool Categories ({get_active_registry_path(registry_path)})"),
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category", no_wrap=True)
    table.add_column("Priority")
    table.add_column("Batch", justify="right")
    table.add_column("Tools")
    table.add_column("Description", style="muted")

    for category in registry.ordered_categories():
        table.add_row(
            f"[tool.name]{escape(category.id)}[/]",
            format_priority(category.priority),
            str(category.batch_size),
            escape(", ".join(category.tool_names)),
            escape(category.description),
        )

    console.print(table)
    console.print(
        f"\n[muted]{len(registry.categories)} categories, {registry.tool_count} tools[/]"
    )
