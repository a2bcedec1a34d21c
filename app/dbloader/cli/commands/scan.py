"""Scan command implementation.

Discovers database files across the configured roots, or across
explicitly given paths.
"""

import json
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from dbloader.cli.types import load_config_or_exit
from dbloader.core.roots import build_coordinator, get_configured_roots, get_explicit_roots
from dbloader.discovery.errors import LoadError
from dbloader.discovery.models import DiscoveredFile, RootSpec
from dbloader.discovery.reporter import DiagnosticReporter
from dbloader.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_warning,
)

app = typer.Typer(
    help="Discover database files.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan_files(
    ctx: typer.Context,
    paths: Annotated[
        list[str] | None,
        typer.Option(
            "--path",
            "-p",
            help="Walk this path instead of the configured roots (repeatable). Must be readable.",
        ),
    ] = None,
    no_system: Annotated[
        bool,
        typer.Option("--no-system", help="Skip the system root."),
    ] = False,
    no_local: Annotated[
        bool,
        typer.Option("--no-local", help="Skip the local root."),
    ] = False,
    no_user: Annotated[
        bool,
        typer.Option("--no-user", help="Skip the user root."),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=32,
            help="Number of roots walked concurrently.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Loader config file to use.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Discover database files and list them in load order.

    Examples:
        dbloader scan                       # Walk system, local and user roots
        dbloader scan --no-user             # Skip the per-user root
        dbloader scan -p ./db -p ./extra    # Walk explicit paths only
        dbloader scan --format json         # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    config = load_config_or_exit(config_path)

    updates: dict[str, object] = {}
    if no_system:
        updates["include_system"] = False
    if no_local:
        updates["include_local"] = False
    if no_user:
        updates["include_user"] = False
    if workers is not None:
        updates["max_workers"] = workers
    if updates:
        config = config.model_copy(update=updates)

    roots = get_explicit_roots(paths) if paths else get_configured_roots(config)
    if not roots:
        print_error("No roots to scan.")
        raise typer.Exit(code=1)

    reporter = DiagnosticReporter()
    coordinator = build_coordinator(config, reporter=reporter)

    try:
        files = coordinator.load_all(roots)
    except LoadError as e:
        _print_warnings(reporter)
        print_error(str(e))
        raise typer.Exit(code=1) from e

    _print_warnings(reporter)

    if output_format == OutputFormat.JSON:
        _print_json(files)
        return

    if not files:
        print_info("No database files found.")
        return

    _print_table(files)
    console.print(f"\n[dim]Found {len(files)} file(s) across {len(roots)} root(s)[/dim]")

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if verbose:
        _print_root_counts(roots, files)


def _print_warnings(reporter: DiagnosticReporter) -> None:
    for message in reporter.warnings:
        print_warning(message)


def _root_name(root: RootSpec) -> str:
    return root.label or root.path


def _print_table(files: list[DiscoveredFile]) -> None:
    """Display discovered files as a Rich table."""
    table = create_table("Discovered Files")
    table.add_column("#", justify="right", style="muted", width=4)
    table.add_column("Root", style="info", width=10)
    table.add_column("Path", style="text")

    for index, f in enumerate(files, start=1):
        table.add_row(str(index), _root_name(f.root), f.path)

    console.print(table)


def _print_json(files: list[DiscoveredFile]) -> None:
    """Display discovered files as JSON."""
    data = [
        {
            "path": f.path,
            "root": f.root.path,
            "label": f.root.label,
            "required": not f.root.tolerate_missing,
        }
        for f in files
    ]
    console.print_json(json.dumps(data))


def _print_root_counts(roots: list[RootSpec], files: list[DiscoveredFile]) -> None:
    """Print how many files each root contributed."""
    counts = Counter(f.root for f in files)
    for root in roots:
        console.print(f"[dim]  {_root_name(root)}: {counts[root]} file(s) from {root.path}[/dim]")
