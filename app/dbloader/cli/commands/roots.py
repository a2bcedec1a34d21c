"""Roots command implementation.

Shows the roots a scan would walk and their current state on disk.
"""

from pathlib import Path
from typing import Annotated

import typer

from dbloader.cli.types import load_config_or_exit
from dbloader.core.roots import get_configured_roots
from dbloader.discovery.classifier import classify
from dbloader.discovery.models import EntryType, RootSpec
from dbloader.utils.formatting import console, create_table

app = typer.Typer(
    help="Show configured database roots.",
    invoke_without_command=True,
)

_STATE_STYLES: dict[str, str] = {
    "directory": "success",
    "file": "success",
    "link": "info",
    "missing": "muted",
    "unreadable": "warning",
    "unknown": "warning",
}


@app.callback(invoke_without_command=True)
def show_roots(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Loader config file to use.",
        ),
    ] = None,
) -> None:
    """List roots in load order with their current state."""
    if ctx.invoked_subcommand is not None:
        return

    config = load_config_or_exit(config_path)
    roots = get_configured_roots(config)

    if not roots:
        console.print("[dim]No roots configured.[/dim]")
        return

    table = create_table("Database Roots")
    table.add_column("Label", style="info", width=10)
    table.add_column("Path", style="text")
    table.add_column("Required", width=8, justify="center")
    table.add_column("State", width=10)

    for root in roots:
        state = root_state(root)
        style = _STATE_STYLES[state]
        required = "yes" if not root.tolerate_missing else "no"
        table.add_row(root.label or "-", root.path, required, f"[{style}]{state}[/{style}]")

    console.print(table)


def root_state(root: RootSpec) -> str:
    """Describe the current state of a root path.

    Args:
        root: Root to inspect.

    Returns:
        One of "directory", "file", "link", "missing", "unreadable", "unknown".
    """
    try:
        entry_type = classify(Path(root.path))
    except FileNotFoundError:
        return "missing"
    except OSError:
        return "unreadable"

    if entry_type == EntryType.DIRECTORY:
        return "directory"
    if entry_type == EntryType.REGULAR:
        return "file"
    if entry_type == EntryType.SYMLINK:
        return "link"
    return "unknown"
