"""Loader configuration commands.

Provides commands to create, inspect and locate the loader config file.
"""

from pathlib import Path
from typing import Annotated

import typer

from dbloader.cli.types import load_config_or_exit
from dbloader.core.config import LoaderConfig, LoaderConfigError, save_loader_config
from dbloader.core.paths import get_loader_config_path
from dbloader.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Manage the loader configuration.",
    no_args_is_help=True,
)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to write.",
        ),
    ] = None,
) -> None:
    """Write a default loader config file."""
    target = config_path or get_loader_config_path()

    if target.exists() and not force:
        print_error(f"Config already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_loader_config(LoaderConfig(), target)
    except LoaderConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to read.",
        ),
    ] = None,
) -> None:
    """Show the effective loader config as JSON."""
    config = load_config_or_exit(config_path)
    console.print_json(config.model_dump_json())


@app.command()
def path() -> None:
    """Show the default config file location."""
    target = get_loader_config_path()
    typer.echo(str(target))
    if not target.exists():
        console.print("[dim](file does not exist, defaults are used)[/dim]")
