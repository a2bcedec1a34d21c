"""CLI commands for dbloader.

This package contains all subcommand implementations.
"""

from dbloader.cli.commands import config, roots, scan

__all__ = ["config", "roots", "scan"]
