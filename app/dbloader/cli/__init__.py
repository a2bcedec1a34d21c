"""CLI package for dbloader.

This package contains the Typer application and all subcommands.
"""

from dbloader.cli.main import app

__all__ = ["app"]
