"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from dbloader import __version__
from dbloader.cli.commands import config, roots, scan

# Create main Typer app
app = typer.Typer(
    name="dbloader",
    help="Discover database files across system, local and user roots.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dbloader version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show per-root file counts.",
        ),
    ] = False,
) -> None:
    """dbloader - discover database files for the downstream parser.

    Walks the system, local and user database roots and lists the
    files a load pass would read, in load order.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(scan.app, name="scan")
app.add_typer(roots.app, name="roots")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
